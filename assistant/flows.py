"""
Assistant flows: each one builds a prompt, calls the model and checks the
shape of its reply. Voice parsing, speech and status analysis degrade to a
safe result; security alerts and scene suggestions let errors through.
"""
import base64
import io
import json
import logging
import wave

from smarthome_panel.errors import ExternalServiceError
from . import prompts
from .client import LLMClient
from .serializers import (
    SecurityAlertResultSerializer,
    SuggestedScenesResultSerializer,
    SystemStatusResultSerializer,
    VoiceCommandResultSerializer,
)

logger = logging.getLogger('assistant')

UNKNOWN_COMMAND_SPEECH = "Sorry, I couldn't process that command."

# PCM returned by the speech endpoint
PCM_RATE = 24000
PCM_CHANNELS = 1
PCM_SAMPLE_WIDTH = 2


def _checked(serializer_class, data):
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        logger.error(f"🤖 Model reply has the wrong shape: {serializer.errors}")
        raise ExternalServiceError("The assistant returned an unexpected reply.")
    return dict(serializer.validated_data)


def parse_voice_command(command, devices, scenes, automations, client=None):
    """
    Turn a spoken command into {action, target, value?, speechResponse}.

    Never raises for model failures; returns an 'unknown' action instead.
    """
    client = client or LLMClient()
    try:
        reply = client.generate_json(
            prompts.SYSTEM_JSON,
            prompts.voice_command(command, devices, scenes, automations),
        )
        result = _checked(VoiceCommandResultSerializer, reply)
    except ExternalServiceError as e:
        logger.warning(f"🎙️ Voice command '{command}' not parsed: {e.detail}")
        return {
            "action": "unknown",
            "target": "",
            "speechResponse": UNKNOWN_COMMAND_SPEECH,
        }

    if result.get('value') is None:
        result.pop('value', None)
    logger.info(f"🎙️ '{command}' -> {result['action']} {result['target']}")
    return result


def pcm_to_wav(pcm, rate=PCM_RATE, channels=PCM_CHANNELS, sample_width=PCM_SAMPLE_WIDTH):
    buf = io.BytesIO()
    with wave.open(buf, 'wb') as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(rate)
        wf.writeframes(pcm)
    return buf.getvalue()


def text_to_speech(text, client=None):
    """Speak `text`; returns an empty data URI when speech is unavailable."""
    client = client or LLMClient()
    try:
        pcm = client.synthesize_speech(text)
    except ExternalServiceError as e:
        logger.error(f"🔊 Text-to-speech failed: {e.detail}")
        return {"audioDataUri": ""}

    encoded = base64.b64encode(pcm_to_wav(pcm)).decode('ascii')
    return {"audioDataUri": f"data:audio/wav;base64,{encoded}"}


def analyze_system_status(system_metrics, client=None):
    """
    Look for anomalies in a JSON metrics document.

    Bad metrics or a failed model call are reported as an anomaly.
    """
    client = client or LLMClient()
    try:
        metrics = json.loads(system_metrics)
        reply = client.generate_json(
            prompts.SYSTEM_JSON,
            prompts.system_status(json.dumps(metrics)),
        )
        return _checked(SystemStatusResultSerializer, reply)
    except (ValueError, ExternalServiceError) as e:
        message = e.detail if isinstance(e, ExternalServiceError) else str(e)
        logger.error(f"🩺 System status analysis failed: {message}")
        return {
            "hasAnomalies": True,
            "anomalyExplanation": f"Error parsing system metrics: {message}",
            "recommendations": "Check system logs for more information.",
        }


def process_security_event(event_type, location, client=None):
    """Build an alert for a smoke, intrusion or gas_leak event."""
    client = client or LLMClient()
    reply = client.generate_json(
        prompts.SYSTEM_JSON,
        prompts.security_alert(event_type, location),
    )
    alert = _checked(SecurityAlertResultSerializer, reply)
    logger.warning(f"🚨 {event_type} in {location}: {alert['alertTitle']}")
    return alert


def suggest_scenes(past_actions, client=None):
    client = client or LLMClient()
    reply = client.generate_json(
        prompts.SYSTEM_JSON,
        prompts.suggest_scenes(past_actions),
    )
    return _checked(SuggestedScenesResultSerializer, reply)
