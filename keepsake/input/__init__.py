from .intents import ACTIVATE, FOCUS_NEXT, FOCUS_PREV, QUIT, Intent, intent_from_event
