"""Display name helpers shared by both console families"""

TAP_LABELS = ('IN', 'IN+M', '<EQ', '<EQ+M', 'EQ>', 'EQ>+M', 'PRE', 'PRE+M', 'POST')


def tap_label(tap):
    if tap is None or not 0 <= tap < len(TAP_LABELS):
        return None
    return TAP_LABELS[tap]


def render_output(name, tap):
    """'<name> (<tap>)', or None unless both parts are known"""
    pos = tap_label(tap)
    if name is None or pos is None:
        return None
    return f"{name} ({pos})"


def custom_or_default(name, fallback):
    # Consoles report an unnamed channel as an empty string
    return name if name else fallback


def gen_range(base, label, size=8):
    return [f"{label} {base + i + 1}" for i in range(size)]


def absent(size):
    return [None] * size
