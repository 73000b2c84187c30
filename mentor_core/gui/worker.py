import threading

from mentor_core.domain.exceptions import BusinessError
from mentor_core.infrastructure.logging.logger import logger


def call_and_report(root, fn, on_done):
    """Run fn and hand (result, error) back to the Tk loop via root.after.

    on_done is always scheduled exactly once, so the caller can re-enable
    its controls there.
    """
    try:
        result = fn()
    except BusinessError as e:
        root.after(0, on_done, None, e)
    except Exception as e:
        logger.error("gui.request_failed", exc_info=e)
        root.after(0, on_done, None, BusinessError(code="CLIENT_ERROR", message=str(e) or type(e).__name__))
    else:
        root.after(0, on_done, result, None)


def start(root, fn, on_done):
    t = threading.Thread(target=call_and_report, args=(root, fn, on_done), daemon=True)
    t.start()
    return t
