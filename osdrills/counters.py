"""Several background counters shown on an interactive console panel.

Each counter runs in its own thread and advances at a fixed frequency,
wrapping back to zero after a configurable maximum. The panel lists every
counter and reacts to single key presses: ``n`` selects the next counter,
space pauses or resumes the selected one, and ``q`` quits.
"""

from __future__ import annotations

import io
import os
import re
import sys
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterator, TextIO

try:
    import select
    import termios
except ImportError:  # pragma: no cover - not a POSIX terminal
    select = None
    termios = None

try:
    import msvcrt
except ImportError:
    msvcrt = None

INT_MAX = 2**31 - 1
LONG_MAX = 2**63 - 1
ALERT_SECONDS = 2.0
USAGE = "usage: {prog} n=[counter_n] freq=[freq_hz] max=[cnt_max]"

_NUMBER = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")

_STATE_LABELS = {True: "paused", False: "counting"}


class UsageError(ValueError):
    """Raised when the command line does not describe a valid configuration."""


@dataclass(frozen=True)
class CounterConfig:
    """How many counters to run, how fast, and where they wrap."""

    counter_n: int
    freq_hz: int
    cnt_max: int


def _parse_integer(text: str) -> int:
    """Read a leading integer the way C's strtol does with base 0."""
    match = _NUMBER.match(text)
    if match is None:
        return 0
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    return -value if sign == "-" else value


def parse_args(argv: list[str]) -> CounterConfig:
    """Parse ``n=``, ``freq=`` and ``max=`` arguments; raise UsageError if incomplete."""
    counter_n = 0
    freq_hz = 0
    cnt_max = -1
    for arg in argv:
        part = arg.strip()
        if part.startswith("n="):
            counter_n = _parse_integer(part[len("n="):])
        elif part.startswith("freq="):
            freq_hz = _parse_integer(part[len("freq="):])
        elif part.startswith("max="):
            cnt_max = max(-LONG_MAX - 1, min(LONG_MAX, _parse_integer(part[len("max="):])))

    if counter_n <= 0 or freq_hz <= 0 or cnt_max < 0 or cnt_max > INT_MAX:
        raise UsageError("counter_n and freq_hz must be positive, cnt_max within 0..INT_MAX")
    return CounterConfig(counter_n, freq_hz, cnt_max)


class CounterTask:
    """A counter advanced by its own thread; it starts paused."""

    def __init__(self, freq_hz: int, cnt_max: int, cnt: int = 0) -> None:
        if freq_hz <= 0:
            raise ValueError("freq_hz must be positive")
        if cnt_max < 0:
            raise ValueError("cnt_max must not be negative")
        self._period = (10**9 // freq_hz) / 1e9
        self._cnt_max = cnt_max
        self._cnt = cnt
        self._lock = threading.Lock()
        self._paused = True
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    @property
    def count(self) -> int:
        with self._lock:
            return self._cnt

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def pause(self, paused: bool) -> None:
        self._paused = paused

    def tick(self) -> None:
        """Advance the counter by one, wrapping past the maximum, unless paused."""
        if self._paused:
            return
        with self._lock:
            self._cnt = (self._cnt + 1) % (self._cnt_max + 1)

    def stop(self) -> None:
        """Stop the counting thread and wait for it to finish."""
        self._stop.set()
        if threading.current_thread() is not self._thread:
            self._thread.join()

    def _run(self) -> None:
        while not self._stop.is_set():
            self.tick()
            self._stop.wait(self._period)


class CounterTaskPool:
    """A fixed set of counters sharing one configuration."""

    def __init__(self, counter_n: int, freq_hz: int, cnt_max: int, cnt: int = 0) -> None:
        self._tasks = [CounterTask(freq_hz, cnt_max, cnt) for _ in range(counter_n)]

    def __len__(self) -> int:
        return len(self._tasks)

    def __getitem__(self, idx: int) -> CounterTask:
        return self._tasks[idx]

    def __iter__(self) -> Iterator[CounterTask]:
        return iter(self._tasks)

    def close(self) -> None:
        for task in self._tasks:
            task.stop()

    def __enter__(self) -> CounterTaskPool:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class CounterPanel:
    """Keyboard handling and text layout for a pool of counters."""

    def __init__(self, pool: CounterTaskPool, clock: Callable[[], float] = time.monotonic) -> None:
        self._pool = pool
        self._clock = clock
        self.alert = ""
        self._alert_time = clock()
        self.current = 0

    def _set_alert(self, text: str) -> None:
        self.alert = text
        self._alert_time = self._clock()

    def handle_key(self, ch: str | None) -> bool:
        """Apply one key press; return False when the key asks to quit."""
        if ch == "q":
            return False
        if ch == "n":
            previous = self.current
            self.current = (self.current + 1) % len(self._pool)
            self._set_alert(f"counter{previous} -> counter{self.current}")
        elif ch == " ":
            task = self._pool[self.current]
            task.pause(not task.paused)
            self._set_alert(f"counter{self.current} {'paused' if task.paused else 'activated'}")
        return True

    def render(self) -> str:
        lines = [
            f"counter{i} : {task.count} ({_STATE_LABELS[task.paused]})\n"
            for i, task in enumerate(self._pool)
        ]
        current = self._pool[self.current]
        return (
            "".join(lines)
            + "\n"
            + self.alert
            + f"\ncurrent: counter{self.current} ({_STATE_LABELS[current.paused]})\n"
        )

    def step(self, ch: str | None, out: TextIO) -> bool:
        """Handle ``ch`` and write one frame to ``out``; return False to stop."""
        if self.alert and self._clock() - self._alert_time >= ALERT_SECONDS:
            self.alert = ""
        if not self.handle_key(ch):
            out.write("stopping, please wait...\n")
            return False
        out.write(self.render())
        return True


class Terminal:
    """The console: raw key input, screen clearing and output."""

    CLEAR = "\033[H\033[J\n"

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._saved: tuple[int, list] | None = None

    def _fileno(self) -> int | None:
        try:
            return self._stdin.fileno()
        except (OSError, ValueError, io.UnsupportedOperation):
            return None

    def setup(self) -> None:
        """Switch the input to unbuffered, non-echoing mode where possible."""
        if termios is None:
            return
        fd = self._fileno()
        if fd is None:
            return
        try:
            saved = termios.tcgetattr(fd)
            attrs = termios.tcgetattr(fd)
        except termios.error:
            return
        attrs[3] &= ~(termios.ICANON | termios.ECHO)
        attrs[6][termios.VTIME] = 0
        attrs[6][termios.VMIN] = 1
        termios.tcsetattr(fd, termios.TCSANOW, attrs)
        self._saved = (fd, saved)

    def restore(self) -> None:
        if self._saved is None or termios is None:
            return
        fd, attrs = self._saved
        termios.tcsetattr(fd, termios.TCSANOW, attrs)
        self._saved = None

    def clear(self) -> None:
        self.write(self.CLEAR)

    def read_key(self) -> str | None:
        """Return a pending key without waiting, or None if there is none."""
        if msvcrt is not None and self._stdin is sys.stdin:
            if not msvcrt.kbhit():
                return None
            return msvcrt.getwch()
        fd = self._fileno()
        if fd is None or select is None:
            return None
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready:
            return None
        data = os.read(fd, 1)
        return data.decode(errors="replace") if data else None

    def write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()


class UiRenderer:
    """Redraws the screen whenever the frame produced by a callback changes."""

    def __init__(self, tick_ms: int, terminal: Terminal | None = None) -> None:
        self.tick_ms = tick_ms
        self.terminal = terminal if terminal is not None else Terminal()

    def run(self, callback: Callable[[TextIO], bool]) -> None:
        """Call ``callback`` every tick until it returns False."""
        last_out = ""
        self.terminal.setup()
        try:
            while True:
                buffer = io.StringIO()
                keep_going = callback(buffer)
                out = buffer.getvalue()
                if out != last_out:
                    self.terminal.clear()
                    self.terminal.write(out + "\n")
                    last_out = out
                if not keep_going:
                    break
                time.sleep(self.tick_ms / 1000)
        finally:
            self.terminal.restore()


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    try:
        config = parse_args(argv)
    except UsageError:
        print(USAGE.format(prog=os.path.basename(sys.argv[0]) if sys.argv else ""))
        return 1

    terminal = Terminal()
    with CounterTaskPool(config.counter_n, config.freq_hz, config.cnt_max) as pool:
        panel = CounterPanel(pool)
        UiRenderer(1, terminal).run(lambda out: panel.step(terminal.read_key(), out))
    return 0