"""
Scene presets.

A scene is not a stored list of target states: activation looks up the
scene's name here and applies the matching steps. Steps are checked in
order and the first one matching a device decides its target state.
"""
import enum
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .models import DeviceCategory


class SceneId(enum.Enum):
    GOOD_MORNING = 'Good Morning'
    MOVIE_NIGHT = 'Movie Night'
    FOCUS_TIME = 'Focus Time'
    GOOD_NIGHT = 'Good Night'

    @classmethod
    def from_name(cls, name):
        key = (name or '').strip().casefold()
        for scene_id in cls:
            if scene_id.value.casefold() == key:
                return scene_id
        return None


@dataclass(frozen=True)
class SceneStep:
    target_active: bool
    device_names: FrozenSet[str] = frozenset()
    category: Optional[str] = None

    def matches(self, device) -> bool:
        if self.device_names:
            return device.name in self.device_names
        return device.category == self.category


def _named(*names, on):
    return SceneStep(target_active=on, device_names=frozenset(names))


def _every(category, on):
    return SceneStep(target_active=on, category=category)


SCENE_PRESETS = {
    SceneId.GOOD_MORNING: (
        _named('Living Room Lights', 'Bedroom Lights', on=True),
        _named('Front Door Lock', on=False),
    ),
    SceneId.MOVIE_NIGHT: (
        _named('Kitchen Lights', 'Bedroom Lights', on=False),
        _named('Living Room Lights', on=True),
    ),
    SceneId.FOCUS_TIME: (
        _every(DeviceCategory.LIGHT, on=True),
    ),
    SceneId.GOOD_NIGHT: (
        _every(DeviceCategory.LIGHT, on=False),
        _every(DeviceCategory.LOCK, on=True),
    ),
}


def target_for(scene_id, device):
    """Target `active` value for the device, or None when the scene leaves it alone."""
    for step in SCENE_PRESETS[scene_id]:
        if step.matches(device):
            return step.target_active
    return None
