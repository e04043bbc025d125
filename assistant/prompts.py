"""
Prompt templates for the assistant flows.
"""

SYSTEM_JSON = "You are a helpful smart home assistant. Always answer with a single JSON object."

NAVIGATION_PAGES = ('Dashboard', 'Rooms', 'Scenes', 'Automations', 'Energy', 'System', 'Profile')


def _bullets(items):
    return '\n'.join(f"- {item}" for item in items) or '- (none)'


VOICE_COMMAND = """You are a smart home voice assistant. Your task is to parse the user's command and convert it into a structured JSON object.
Based on the command, determine the action ('device', 'scene', 'automation', or 'navigation'), the target, and any necessary value (e.g., true/false for on/off).
Also, provide a short, natural language response to confirm the action.

If the user's command is ambiguous or doesn't match any available items, set the action to 'unknown' and provide a helpful speech response like "Sorry, I couldn't find a device or scene with that name."

Analyze the sentiment of the command to determine the 'value'. For example, "turn on", "activate", "enable" should result in a value of true. "Turn off", "deactivate", "disable", "pause" should result in a value of false.

Available devices:
{devices}

Available scenes:
{scenes}

Available automations:
{automations}

Available pages for navigation: {pages}.

User command: "{command}"

Respond with a JSON object with the keys "action", "target", "value" (optional) and "speechResponse".
"""

SYSTEM_STATUS = """You are an AI-powered smart home system expert.

You are provided with system metrics data in JSON format. Analyze the data to proactively detect anomalies that could indicate potential issues.

Based on the data, determine if there are any anomalies, explain the anomalies in an easy-to-understand format, and provide recommendations for addressing them.

System Metrics Data:
{metrics}

Respond with a JSON object with the keys "hasAnomalies" (boolean), "anomalyExplanation" (string) and "recommendations" (string).
"""

SECURITY_ALERT = """You are a home security AI assistant. Your primary function is to alert users to critical security events in a clear, calm, and actionable manner.

A security event has been detected.
Event Type: {event_type}
Location: {location}

Generate a response in JSON format with the following fields:
- alertTitle: A short, urgent title for the alert.
- alertDescription: A clear, concise description of what happened and where.
- recommendations: A list of 2-3 immediate, simple actions the user should take.
- speechResponse: A voice message to announce the event. Start with "Alert:" and speak calmly and clearly.

Example for a smoke event in the kitchen:
- alertTitle: "Smoke Detected in Kitchen!"
- alertDescription: "The smart smoke detector in the Kitchen has been triggered."
- recommendations: ["Evacuate the area immediately.", "Check for signs of fire from a safe distance.", "Contact emergency services if necessary."]
- speechResponse: "Alert: Smoke has been detected in the kitchen. Please evacuate and check for signs of fire."
"""

SUGGEST_SCENES = """You are a smart home automation expert. Based on the user's past actions, suggest customized smart home scenarios.

Past Actions:
{past_actions}

Suggest smart home scenarios that the user might find useful, based on their past actions. Be specific and provide actionable scene names.

Respond with a JSON object with the key "suggestedScenes" (a list of strings).
"""


def voice_command(command, devices, scenes, automations):
    return VOICE_COMMAND.format(
        command=command,
        devices=_bullets(devices),
        scenes=_bullets(scenes),
        automations=_bullets(automations),
        pages=', '.join(NAVIGATION_PAGES),
    )


def system_status(metrics):
    return SYSTEM_STATUS.format(metrics=metrics)


def security_alert(event_type, location):
    return SECURITY_ALERT.format(event_type=event_type, location=location)


def suggest_scenes(past_actions):
    return SUGGEST_SCENES.format(past_actions=_bullets(past_actions))
