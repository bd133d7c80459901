import os
import signal


class ForegroundTracker:
    """
    Remembers the one child the shell is currently waiting on, and forwards
    interrupts to it.

    Only the line process forked by the loop is tracked. Later pipeline
    stages are not signalled directly; they end when their pipe peer goes
    away (end of input, or SIGPIPE on write).
    """

    def __init__(self) -> None:
        self.pid = 0

    def track(self, pid: int) -> None:
        self.pid = pid

    def clear(self) -> None:
        self.pid = 0

    def relay(self, signum: int, frame=None) -> None:
        if self.pid <= 0:
            return
        try:
            os.kill(self.pid, signum)
        except ProcessLookupError:
            #child was reaped between waitpid() returning and clear()
            pass

    def install(self, signum: int = signal.SIGINT) -> None:
        signal.signal(signum, self.relay)
