"""
Carry out a parsed voice command against the home state.
"""
import logging

logger = logging.getLogger('assistant')


def _find_by_name(queryset, name):
    for obj in queryset:
        if obj.name == name:
            return obj
    return None


def execute_voice_command(service, parsed):
    """
    Run the action described by `parsed` through `service`
    (a HomeStateService).

    Returns {"executed": bool, "speech": str, "navigate_to": str | None}.
    """
    action = parsed.get('action')
    target = parsed.get('target') or ''
    executed = False
    navigate_to = None

    if action == 'device':
        device = _find_by_name(service.get('device'), target)
        if device is not None:
            service.toggle_device(device.pk)
            executed = True
    elif action == 'scene':
        service.activate_scene(target)
        executed = True
    elif action == 'automation':
        automation = _find_by_name(service.get('automation'), target)
        if automation is not None:
            service.toggle_automation(automation.pk, parsed.get('value'))
            executed = True
    elif action == 'navigation':
        navigate_to = f"/{target.lower()}"
        executed = True

    if executed:
        speech = parsed.get('speechResponse') or ''
    elif action == 'unknown':
        # The model already explained why it gave up
        speech = parsed.get('speechResponse') or f"Sorry, I couldn't find the {target}."
    else:
        speech = f"Sorry, I couldn't find the {target}."

    logger.info(f"🎙️ {action} '{target}' {'executed' if executed else 'not executed'}")
    return {"executed": executed, "speech": speech, "navigate_to": navigate_to}
