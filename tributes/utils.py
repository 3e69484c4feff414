def display_name(user, fallback='Anonymous'):
    """Name shown next to a tribute: full name, then e-mail, then ``fallback``."""
    if user is None:
        return fallback
    return user.get_full_name() or user.email or fallback
