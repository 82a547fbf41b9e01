# Snake player GUI: manual play with an autopilot toggle.
from __future__ import annotations

import time
import tkinter as tk
from tkinter import messagebox

# Support both package imports and running this file directly.
try:
    from .game_logic import GameStatus, SnakeConfig, SnakeGame, Snapshot
    from .snake_state import Outcome
except ImportError:
    from game_logic import GameStatus, SnakeConfig, SnakeGame, Snapshot
    from snake_state import Outcome


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class SnakeApp:
    """Tkinter presentation layer for SnakeGame."""
    BG = "#101418"
    BOARD_BG = "#000000"
    SIDEBAR_BG = "#0f1720"
    SNAKE_HEAD = "#00aa00"
    SNAKE_BODY = "#00ff00"
    FOOD_COLOR = "#ff0000"
    TEXT_PRIMARY = "#e6eef7"
    TEXT_MUTED = "#95a4b8"
    ACCENT = "#42c4ff"

    GRID_PRESETS = {
        "Small (10x10)": 10,
        "Medium (20x20)": 20,
        "Large (30x30)": 30,
    }
    # The timer polls faster than the move interval; the game decides when to move.
    POLL_MS = 15

    def __init__(self, root: tk.Tk) -> None:
        self.root = root
        self.root.title("Snake")
        self.root.configure(bg=self.BG)

        self.config = SnakeConfig()
        self.game = SnakeGame(self.config, now_ms=_now_ms())
        self.paused = True
        self.after_id: str | None = None  # Tkinter timer id for the game loop

        self._build_layout()
        self._bind_keys()
        self._apply_canvas_size()
        self.draw()

    def _build_layout(self) -> None:
        """Create game canvas + right sidebar panel."""
        container = tk.Frame(self.root, bg=self.BG)
        container.pack(fill="both", expand=True, padx=16, pady=16)

        self.canvas = tk.Canvas(container, bg=self.BOARD_BG, highlightthickness=0, bd=0)
        self.canvas.pack(side="left", padx=(0, 16))

        self.sidebar = tk.Frame(container, bg=self.SIDEBAR_BG, width=260)
        self.sidebar.pack(side="right", fill="y")
        self.sidebar.pack_propagate(False)

        self.score_var = tk.StringVar()
        self.state_var = tk.StringVar()
        self.mode_var = tk.StringVar()
        for var in (self.score_var, self.state_var, self.mode_var):
            tk.Label(
                self.sidebar,
                textvariable=var,
                fg=self.TEXT_PRIMARY,
                bg=self.SIDEBAR_BG,
                font=("Helvetica", 12),
                anchor="w",
            ).pack(fill="x", padx=12, pady=4)

        settings = tk.Frame(self.sidebar, bg=self.SIDEBAR_BG)
        settings.pack(fill="x", padx=12, pady=(12, 4))
        self.grid_size_var = tk.StringVar(value="Medium (20x20)")
        self.speed_var = tk.StringVar(value=str(self.config.speed_ms))
        tk.OptionMenu(settings, self.grid_size_var, *self.GRID_PRESETS.keys()).pack(fill="x", pady=2)
        speed_row = tk.Frame(settings, bg=self.SIDEBAR_BG)
        speed_row.pack(fill="x", pady=2)
        tk.Label(speed_row, text="Speed (ms)", fg=self.TEXT_PRIMARY, bg=self.SIDEBAR_BG).pack(side="left")
        tk.Spinbox(speed_row, from_=0, to=9999, textvariable=self.speed_var, width=8).pack(side="right")

        for text, command in (
            ("Start / Pause", self.toggle_pause),
            ("Reset", self.reset_game),
            ("Autopilot", self.toggle_autopilot),
            ("Apply Settings", self.apply_settings),
        ):
            tk.Button(
                self.sidebar,
                text=text,
                command=command,
                fg="#09141f",
                bg=self.ACCENT,
                bd=0,
                relief="flat",
                font=("Helvetica", 11, "bold"),
            ).pack(fill="x", padx=12, pady=4)

        tk.Label(
            self.sidebar,
            text="Arrows / WASD: move\nEnter: autopilot\nSpace: start, pause, restart",
            fg=self.TEXT_MUTED,
            bg=self.SIDEBAR_BG,
            justify="left",
        ).pack(anchor="w", padx=12, pady=(12, 4))

    def _bind_keys(self) -> None:
        for keys, direction in (
            (("<Up>", "w"), "up"),
            (("<Down>", "s"), "down"),
            (("<Left>", "a"), "left"),
            (("<Right>", "d"), "right"),
        ):
            for key in keys:
                self.root.bind(key, lambda _e, d=direction: self.game.request_turn(d))
        self.root.bind("<Return>", lambda _e: self.toggle_autopilot())
        self.root.bind("<space>", lambda _e: self._on_space())

    def apply_settings(self) -> None:
        """Validate sidebar values, then rebuild the game with the new config."""
        try:
            speed_ms = int(self.speed_var.get())
            config = SnakeConfig(
                grid_size=self.GRID_PRESETS[self.grid_size_var.get()],
                cell_size=self.config.cell_size,
                speed_ms=speed_ms,
                autopilot=self.game.autopilot_enabled,
            )
            config.validate()
        except (ValueError, KeyError) as exc:
            messagebox.showerror("Invalid Setting", str(exc))
            return

        self._cancel_loop()
        self.config = config
        self.game = SnakeGame(self.config, now_ms=_now_ms())
        self.paused = True
        self._apply_canvas_size()
        self.draw()

    def _apply_canvas_size(self) -> None:
        side_pixels = self.config.grid_size * self.config.cell_size
        self.canvas.configure(width=side_pixels, height=side_pixels)

    def _cancel_loop(self) -> None:
        if self.after_id is not None:
            self.root.after_cancel(self.after_id)
            self.after_id = None

    def _on_space(self) -> None:
        if self.game.status.is_terminal:
            self.reset_game()
        self.toggle_pause()

    def toggle_pause(self) -> None:
        if self.game.status.is_terminal:
            return
        self.paused = not self.paused
        if self.paused:
            self._cancel_loop()
        else:
            self.game.resume(_now_ms())
            self.tick()
        self.draw()

    def toggle_autopilot(self) -> None:
        self.game.set_autopilot(not self.game.autopilot_enabled)
        self.draw()

    def reset_game(self) -> None:
        self._cancel_loop()
        self.game.reset(_now_ms())
        self.paused = True
        self.draw()

    def tick(self) -> None:
        """Poll the game clock; reschedules itself until paused or finished."""
        self._cancel_loop()
        if self.paused:
            return

        result = self.game.tick(_now_ms())
        if result.status.is_terminal:
            self.draw()
            return
        if result.outcome is not Outcome.IDLE:
            self.draw()
        self.after_id = self.root.after(self.POLL_MS, self.tick)

    def _draw_cell(self, x: int, y: int, color: str) -> None:
        cell = self.config.cell_size
        self.canvas.create_rectangle(x * cell, y * cell, (x + 1) * cell, (y + 1) * cell, fill=color, outline="")

    def draw(self) -> None:
        """Render food, snake, sidebar labels, and the end-of-game overlay."""
        snap: Snapshot = self.game.snapshot()
        self.canvas.delete("all")

        if snap.food is not None:
            self._draw_cell(*snap.food, self.FOOD_COLOR)
        for x, y in snap.body[:-1]:
            self._draw_cell(x, y, self.SNAKE_BODY)
        self._draw_cell(*snap.head, self.SNAKE_HEAD)

        self.score_var.set(f"Score: {snap.score}")
        self.mode_var.set(f"Autopilot: {'on' if snap.autopilot else 'off'}")
        if snap.status is GameStatus.RUNNING:
            self.state_var.set("State: Paused" if self.paused else "State: Running")
            return

        message = "Victory!" if snap.status is GameStatus.VICTORY else "Game Over"
        self.state_var.set(f"State: {message}")
        side = self.config.grid_size * self.config.cell_size
        self.canvas.create_rectangle(0, 0, side, side, fill="#000000", stipple="gray50", outline="")
        self.canvas.create_text(
            side // 2,
            side // 2 - 12,
            text=f"{message} Final score: {snap.score}",
            fill=self.TEXT_PRIMARY,
            font=("Helvetica", 20, "bold"),
        )
        self.canvas.create_text(
            side // 2,
            side // 2 + 20,
            text="Press Space to play again",
            fill=self.TEXT_MUTED,
            font=("Helvetica", 12),
        )


def run_player_gui() -> None:
    """Launch the Snake player window."""
    root = tk.Tk()
    SnakeApp(root)
    root.mainloop()


if __name__ == "__main__":
    run_player_gui()
