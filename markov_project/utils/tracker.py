import time
from functools import wraps
from markov_project.utils.debugg_utils import Colors


def track(func=None, v=False, label=None):
    """
    Time a call and print a [DONE] line.

    When the wrapped call returns a chain (anything with `size()`), the number
    of stored tails is appended so training runs can be compared at a glance.
    """

    def deco(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            name = f"{Colors.BOLD}{label or f.__name__ + '()'}{Colors.ENDC}"
            if v:
                print(f"{name} {Colors.OKBLUE}[STARTING]{Colors.ENDC}")
            start = time.time()
            result = f(*args, **kwargs)
            duration = time.time() - start
            extra = ""
            if callable(getattr(result, "size", None)):
                extra = f" || tails: {result.size()}"
            print(f"{name} {Colors.OKGREEN}[DONE]{Colors.ENDC} {duration:.2f}s{extra}")
            return result

        return wrapper

    return deco(func) if func is not None else deco
