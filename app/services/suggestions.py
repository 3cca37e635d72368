"""
Marketing message suggestions.

Template based; no model is called.
"""

DEFAULT_MESSAGE = "Huge Discount Alert! Shop now and save big!"


def suggest_message(message_context: str, user_preferences: str) -> str:
    """
    Build a suggested marketing message.

    Args:
        message_context: What the campaign is about
        user_preferences: Audience preferences to mention

    Returns:
        Suggested message text
    """
    context = (message_context or "").strip() or "your campaign"
    preferences = (user_preferences or "").strip() or "all customers"
    return (
        f'Based on "{context}" and preferences "{preferences}", '
        f'here\'s your marketing message: "{DEFAULT_MESSAGE}"'
    )
