"""automate-ai: natural-language automations for Home Assistant."""

__version__ = "0.1.0"
