from functools import wraps


class BrainError(Exception):
    '''
    Bad user input, above the evaluator: unlexable text, unconvertible number.

    The evaluator itself never raises these.
    '''
    pass


def wrap_user_errors(fmt):
    '''
    Decorator converting any exception into a BrainError with a user message.

    fmt is formatted with the call's arguments. Passes through BrainErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except BrainError:
                raise
            except Exception as e:
                raise BrainError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator
