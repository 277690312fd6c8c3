"""Canvas-based web front-end.

This renderer draws directly to the HTML5 canvas via PyScript/pyodide's JS
bridge.  It owns every DOM subscription (keyboard, touch and HUD buttons) and
forwards them to a :class:`~teratris.session.Session`; high scores live in the
browser's ``localStorage``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from js import Date, document, localStorage, window  # type: ignore
from pyodide.ffi import create_proxy  # type: ignore

from .config import GameConfig
from .controls import TOUCH_BINDINGS, command_for_key, dispatch
from .scores import STORAGE_KEY, HighScoreTable
from .session import Session, SessionEvent, SessionStatus
from .utils import format_elapsed


LOGGER = logging.getLogger(__name__)

CELL_SIZE = 30
PREVIEW_CELL = 20

# Indexed by cell value.
CELL_COLORS = [
    "#061726",
    "#FF0D72",
    "#0DC2FF",
    "#0DFF72",
    "#F538FF",
    "#FF8E0D",
    "#FFE138",
    "#3877FF",
]


class LocalStorage:
    """High-score storage backed by ``window.localStorage``."""

    def __init__(self, key: str = STORAGE_KEY) -> None:
        self.key = key

    def read(self) -> Optional[str]:
        return localStorage.getItem(self.key)

    def write(self, text: str) -> None:
        localStorage.setItem(self.key, text)


class ActivityLogHandler(logging.Handler):
    """Prepend log records to the page's activity log element."""

    def __init__(self, element_id: str = "activityLog") -> None:
        super().__init__(logging.INFO)
        self.element_id = element_id

    def emit(self, record: logging.LogRecord) -> None:
        el = document.getElementById(self.element_id)
        if not el:
            return
        entry = document.createElement("div")
        entry.textContent = f"[{Date().toLocaleTimeString()}] {self.format(record)}"
        el.prepend(entry)


def _set_text(element_id: str, text: str) -> None:
    el = document.getElementById(element_id)
    if el:
        el.textContent = text


@dataclass
class Runner:
    config: GameConfig = field(default_factory=GameConfig)
    session: Session = field(init=False)
    scores: HighScoreTable = field(init=False)
    last_ts: float = 0.0
    raf_handle: Optional[int] = None
    _tick_proxy: object = field(default=None, repr=False)
    _proxies: list = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.session = Session(self.config)
        self.scores = HighScoreTable(LocalStorage(), self.config.high_score_limit)

    def _proxy(self, fn):
        proxy = create_proxy(fn)
        self._proxies.append(proxy)
        return proxy

    # ----------------------- Drawing -----------------------
    def _draw_cells(self, ctx, grid, size: int, skip_empty: bool) -> None:
        for r, row in enumerate(grid):
            for c, val in enumerate(row):
                if skip_empty and not val:
                    continue
                ctx.fillStyle = CELL_COLORS[val]
                ctx.fillRect(c * size + 1, r * size + 1, size - 2, size - 2)

    def _draw(self) -> None:
        snap = self.session.snapshot()
        canvas = document.getElementById("gameCanvas")
        if canvas:
            ctx = canvas.getContext("2d")
            ctx.fillStyle = CELL_COLORS[0]
            ctx.fillRect(0, 0, self.config.width * CELL_SIZE, self.config.height * CELL_SIZE)
            self._draw_cells(ctx, snap.grid, CELL_SIZE, skip_empty=True)
        preview = document.getElementById("nextCanvas")
        if preview:
            nctx = preview.getContext("2d")
            nctx.clearRect(0, 0, preview.width, preview.height)
            if snap.next_piece:
                self._draw_cells(nctx, snap.next_piece, PREVIEW_CELL, skip_empty=True)
        _set_text("hudScore", str(snap.score))
        _set_text("hudLines", str(snap.lines))
        _set_text("hudLevel", str(snap.level))
        _set_text("hudTime", format_elapsed(snap.elapsed_ms))

    def _refresh_best(self) -> None:
        top = self.scores.best()
        _set_text("localBest", f"{top.name} - {top.score}" if top else "-")

    def _render_high_scores(self) -> None:
        el = document.getElementById("highScoreList")
        if not el:
            return
        el.innerHTML = ""
        records = self.scores.load_top_scores()
        if not records:
            el.innerHTML = "<li>No high scores yet</li>"
            return
        for rec in records:
            li = document.createElement("li")
            li.textContent = f"{rec.name} - {rec.score} ({rec.date[:10]})"
            el.appendChild(li)

    # ----------------------- Session events -----------------------
    def _on_event(self, event: SessionEvent, payload) -> None:
        if event is SessionEvent.GAME_OVER:
            name_input = document.getElementById("playerName")
            name = name_input.value if name_input else ""
            self.scores.submit_score(name, payload)
            best = self.scores.best()
            _set_text("finalScore", f"Score: {payload}")
            _set_text("finalBest", f"Best: {best.score} ({best.name})" if best else "Best: -")
            overlay = document.getElementById("gameOverOverlay")
            if overlay:
                overlay.classList.remove("hidden")
            self._refresh_best()
            self._render_high_scores()
        elif event is SessionEvent.STABILITY_COMPUTED:
            bar = document.getElementById("stabilityBar")
            if bar:
                bar.style.width = f"{payload}%"
            _set_text("stabilityPct", f"{payload}%")
        elif event in (SessionEvent.PAUSED, SessionEvent.RESUMED):
            _set_text("pauseBtn", "Resume" if self.session.paused else "Pause")

    # ----------------------- Loop and input -----------------------
    def _tick(self, ts: float) -> None:
        try:
            if self.last_ts == 0:
                self.last_ts = ts
            dt = ts - self.last_ts
            self.last_ts = ts
            self.session.tick(dt)
            self._draw()
        except Exception:
            LOGGER.exception("Crash detected, resetting")
            self.session.reset()
            self.last_ts = 0
        self.raf_handle = window.requestAnimationFrame(self._tick_proxy)

    def _on_key(self, evt) -> None:
        command = command_for_key(evt.key)
        if command is None:
            return
        if evt.key == " ":
            evt.preventDefault()
        dispatch(self.session, command)
        self._draw()

    def _bind_click(self, element_id: str, fn) -> None:
        el = document.getElementById(element_id)
        if el:
            el.addEventListener("click", self._proxy(lambda _evt: fn()))

    def install(self) -> None:
        """Attach DOM listeners and start the animation loop."""

        logging.getLogger("teratris").addHandler(ActivityLogHandler())
        logging.getLogger("teratris").setLevel(logging.INFO)
        self.session.subscribe(self._on_event)
        document.addEventListener("keydown", self._proxy(self._on_key))
        for element_id, command in TOUCH_BINDINGS.items():
            self._bind_click(element_id, lambda command=command: dispatch(self.session, command))
        self._bind_click("startFromMenu", self.start)
        self._bind_click("playAgainBtn", self.start)
        self._bind_click("pauseBtn", self.session.pause_toggle)
        self._bind_click("resumeBtn", self.session.resume)
        self._bind_click("simulateBtn", self.session.simulate_stability)
        self._bind_click("quitBtn", self.stop)
        self._bind_click("clearScores", self.clear_scores)
        self._refresh_best()
        self._render_high_scores()
        self._tick_proxy = self._proxy(self._tick)
        self.raf_handle = window.requestAnimationFrame(self._tick_proxy)

    def start(self) -> None:
        overlay = document.getElementById("gameOverOverlay")
        if overlay:
            overlay.classList.add("hidden")
        self.session.reset()
        self.last_ts = 0
        self.session.start()
        self._refresh_best()
        self._draw()

    def stop(self) -> None:
        if self.session.status is SessionStatus.IDLE:
            LOGGER.debug("Stop ignored: not running")
            return
        self.session.reset()
        LOGGER.info("Game stopped")
        self._draw()

    def clear_scores(self) -> None:
        if window.confirm("Clear all high scores?"):
            self.scores.clear()
            self._render_high_scores()
            self._refresh_best()


runner = Runner()


def install() -> None:
    runner.install()


def start() -> None:
    runner.start()


def pause() -> None:
    runner.session.pause_toggle()


def stop() -> None:
    runner.stop()
