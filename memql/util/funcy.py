from functools import wraps


# Borrowed from: funcy
def collecting(func):
    """ Convert a generator function into a list-returning function

    Example:
        @collecting
        def parse_fields(names):
            for name in names:
                yield name.lower()
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        return list(func(*args, **kwargs))
    return wrapper
