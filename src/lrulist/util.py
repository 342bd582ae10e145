def coalesce(*args):
    """Returns the first non-None value in `args`, or `None` if they are all `None`."""

    for a in args:
        if a is not None:
            return a
    return None
