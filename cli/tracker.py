#!/usr/bin/env python3
"""Self-Discipline TUI: interactive terminal tracker powered by Textual."""

from __future__ import annotations

import sys
from typing import Any, Callable

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.logging import TextualHandler
from textual.timer import Timer
from textual.widgets import (
    Button,
    Checkbox,
    ContentSwitcher,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Static,
)

from discipline import (
    Grooming,
    Hydration,
    KeyStore,
    Notes,
    Nutrition,
    RestTimer,
    Sleep,
    Strength,
    TabState,
    load_profile,
    open_store,
    score_breakdown,
    score_history,
    workspace_root,
)
from discipline.hydration import QUICK_ADD_ML, UNDO_ML
from discipline.logging_config import configure_logging

CSS = """
Screen {
    layout: vertical;
}

ContentSwitcher {
    height: 1fr;
    padding: 1 2;
}

.section-title {
    text-style: bold;
    color: $accent;
    margin: 0 0 1 0;
}

.row {
    height: auto;
    margin: 0 0 1 0;
}

.row Button {
    margin: 0 1 0 0;
}

.row Input {
    width: 1fr;
}

#score-total {
    text-style: bold;
    padding: 1 2;
    border: tall $primary-background-darken-2;
    height: auto;
}

.chart {
    height: auto;
    padding: 1 0;
}

#rest-display {
    text-style: bold;
    padding: 0 2;
}
"""

VIEW_IDS = {
    "Dashboard": "dashboard",
    "Hydratation": "hydration",
    "Musculation": "strength",
    "Nutrition": "nutrition",
    "Sommeil": "sleep",
    "Lookmaxing": "grooming",
    "Notes": "notes",
}
TAB_FOR_VIEW = {v: k for k, v in VIEW_IDS.items()}

BLOCKS = " ▁▂▃▄▅▆▇█"


def _sparkline(points) -> str:
    """Compact 7-day chart: one block per day plus weekday labels."""
    bars = "  ".join(BLOCKS[min(8, round(p.pct / 100 * 8))] for p in points)
    labels = " ".join(p.label[:2] for p in points)
    return f"{bars}\n{labels}"


def _progress(pct: int, width: int = 30) -> str:
    filled = round(pct / 100 * width)
    return "█" * filled + "░" * (width - filled) + f" {pct}%"


def _parse(value: str, default: float = 0) -> float:
    try:
        return float(value.replace(",", "."))
    except ValueError:
        return default


# ── Views ──────────────────────────────────────────────────────


class DashboardView(Vertical):
    """Today's score, module breakdown and the last 7 days."""

    def __init__(self, store: KeyStore, **kwargs) -> None:
        super().__init__(**kwargs)
        self.store = store

    def compose(self) -> ComposeResult:
        yield Label("Dashboard", classes="section-title")
        yield Static(id="score-total")
        yield DataTable(id="score-table")
        yield Static(classes="chart", id="score-chart")

    def on_mount(self) -> None:
        table = self.query_one("#score-table", DataTable)
        table.add_columns("Module", "Done", "Points")
        self.refresh_score()

    def refresh_score(self) -> None:
        weight = load_profile().score_weight
        card = score_breakdown(self.store, weight=weight)
        self.query_one("#score-total", Static).update(f"Score du jour: {card.total}/100\n{_progress(card.total)}")
        table = self.query_one("#score-table", DataTable)
        table.clear()
        for m in card.modules:
            table.add_row(m.title, "✅" if m.done else "—", f"{m.points}/{m.weight}")
        history = score_history(self.store, weight=weight)
        self.query_one("#score-chart", Static).update(_sparkline(history))


class HydrationView(Vertical):
    def __init__(self, store: KeyStore, **kwargs) -> None:
        super().__init__(**kwargs)
        self.tracker = Hydration(store)

    def compose(self) -> ComposeResult:
        yield Label("Hydratation quotidienne", classes="section-title")
        yield Static(id="hydr-progress")
        yield Horizontal(
            *[Button(f"+{a} mL", id=f"hydr-add-{a}") for a in QUICK_ADD_ML],
            Button(f"–{abs(UNDO_ML)} mL", id="hydr-undo", variant="error"),
            classes="row",
        )
        yield Horizontal(
            Label("Objectif (mL) "),
            Input(str(int(self.tracker.goal)), id="hydr-goal", type="number"),
            classes="row",
        )
        yield Static(classes="chart", id="hydr-chart")

    def on_mount(self) -> None:
        self._render()

    def _render(self) -> None:
        ml, goal, pct = self.tracker.progress()
        self.query_one("#hydr-progress", Static).update(f"{ml:g} mL / {goal:g} mL\n{_progress(pct)}")
        self.query_one("#hydr-chart", Static).update(_sparkline(self.tracker.history()))

    @on(Button.Pressed)
    def _on_add(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "hydr-undo":
            self.tracker.add(UNDO_ML)
        elif button_id.startswith("hydr-add-"):
            self.tracker.add(int(button_id.removeprefix("hydr-add-")))
        else:
            return
        self._render()

    @on(Input.Submitted, "#hydr-goal")
    def _on_goal(self, event: Input.Submitted) -> None:
        self.tracker.set_goal(_parse(event.value, self.tracker.goal))
        self._render()


class SleepView(Vertical):
    def __init__(self, store: KeyStore, **kwargs) -> None:
        super().__init__(**kwargs)
        self.tracker = Sleep(store)

    def compose(self) -> ComposeResult:
        yield Label("Sommeil", classes="section-title")
        yield Static(id="sleep-status")
        yield Horizontal(
            Label("Heures dormies "),
            Input(placeholder="7.5", id="sleep-hours", type="number"),
            classes="row",
        )
        yield Horizontal(
            Label("Objectif (h) "),
            Input(f"{self.tracker.goal:g}", id="sleep-goal", type="number"),
            classes="row",
        )
        yield Static(classes="chart", id="sleep-chart")

    def on_mount(self) -> None:
        self._render()

    def _render(self) -> None:
        mark = " ✅" if self.tracker.done() else ""
        self.query_one("#sleep-status", Static).update(f"{self.tracker.hours():g} h / {self.tracker.goal:g} h{mark}")
        self.query_one("#sleep-chart", Static).update(_sparkline(self.tracker.history()))

    @on(Input.Submitted, "#sleep-hours")
    def _on_hours(self, event: Input.Submitted) -> None:
        self.tracker.log_hours(_parse(event.value))
        self._render()

    @on(Input.Submitted, "#sleep-goal")
    def _on_goal(self, event: Input.Submitted) -> None:
        self.tracker.set_goal(_parse(event.value, self.tracker.goal))
        self._render()


class GroomingView(Vertical):
    def __init__(self, store: KeyStore, **kwargs) -> None:
        super().__init__(**kwargs)
        self.tracker = Grooming(store)
        self._tasks: list[str] = []

    def compose(self) -> ComposeResult:
        yield Label("Lookmaxing", classes="section-title")
        yield Static(id="look-summary")
        yield Vertical(id="look-list")
        yield Horizontal(Input(placeholder="Nouvelle tâche", id="look-new"), classes="row")

    async def on_mount(self) -> None:
        await self._rebuild()

    async def _rebuild(self) -> None:
        checklist = self.query_one("#look-list", Vertical)
        await checklist.remove_children()
        checked = self.tracker.checked()
        self._tasks = list(checked)
        for i, (task, flag) in enumerate(checked.items()):
            checklist.mount(Checkbox(task, value=flag, id=f"look-{i}"))
        self._summary()

    def _summary(self) -> None:
        done, total = self.tracker.completion()
        self.query_one("#look-summary", Static).update(f"{done}/{total} aujourd'hui")

    @on(Checkbox.Changed)
    def _on_toggle(self, event: Checkbox.Changed) -> None:
        index = int((event.checkbox.id or "look-0").removeprefix("look-"))
        task = self._tasks[index]
        if self.tracker.checked().get(task) != event.value:
            self.tracker.toggle(task)
        self._summary()

    @on(Input.Submitted, "#look-new")
    async def _on_new(self, event: Input.Submitted) -> None:
        if self.tracker.add_task(event.value):
            event.input.value = ""
            await self._rebuild()


class NotesView(Vertical):
    BINDINGS = [
        Binding("space", "toggle_item", "Toggle"),
        Binding("delete", "delete_item", "Delete"),
    ]

    def __init__(self, store: KeyStore, **kwargs) -> None:
        super().__init__(**kwargs)
        self.tracker = Notes(store)

    def compose(self) -> ComposeResult:
        yield Label("Notes", classes="section-title")
        yield Horizontal(id="notes-cats", classes="row")
        yield Horizontal(Input(placeholder="Nouvelle note", id="notes-new"), classes="row")
        yield DataTable(id="notes-table", cursor_type="row")

    async def on_mount(self) -> None:
        self.query_one("#notes-table", DataTable).add_columns("", "Note")
        await self._render()

    async def _render(self) -> None:
        cats = self.query_one("#notes-cats", Horizontal)
        await cats.remove_children()
        for i, cat in enumerate(self.tracker.categories):
            variant = "primary" if cat == self.tracker.active else "default"
            cats.mount(Button(cat, id=f"cat-{i}", variant=variant))
        table = self.query_one("#notes-table", DataTable)
        table.clear()
        for item in self.tracker.items():
            table.add_row("✓" if item.done else "·", item.text, key=item.id)

    def _selected_id(self) -> str | None:
        table = self.query_one("#notes-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return row_key.value

    @on(Button.Pressed)
    async def _on_category(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("cat-"):
            return
        self.tracker.set_active(self.tracker.categories[int(button_id.removeprefix("cat-"))])
        await self._render()

    @on(Input.Submitted, "#notes-new")
    async def _on_new(self, event: Input.Submitted) -> None:
        if self.tracker.add_item(event.value):
            event.input.value = ""
            await self._render()

    async def action_toggle_item(self) -> None:
        item_id = self._selected_id()
        if item_id and self.tracker.toggle_item(item_id):
            await self._render()

    async def action_delete_item(self) -> None:
        item_id = self._selected_id()
        if item_id and self.tracker.delete_item(item_id):
            await self._render()


class StrengthView(Vertical):
    """Sets logged today plus the rest countdown between sets."""

    def __init__(self, store: KeyStore, **kwargs) -> None:
        super().__init__(**kwargs)
        self.tracker = Strength(store)
        self.rest = RestTimer(on_finish=self._on_rest_done)
        self._interval: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Label("Musculation", classes="section-title")
        yield Horizontal(
            Input(placeholder="Exercice", id="gym-exercise"),
            Input(placeholder="Reps", id="gym-reps", type="integer"),
            Input(placeholder="kg", id="gym-kg", type="number"),
            Button("Ajouter la série", id="gym-add"),
            classes="row",
        )
        yield Horizontal(
            Button("Repos", id="gym-rest", variant="primary"),
            Button("Stop", id="gym-stop"),
            Static(id="rest-display"),
            classes="row",
        )
        yield DataTable(id="gym-table", cursor_type="row")
        yield Static(id="gym-volume")

    def on_mount(self) -> None:
        self.query_one("#gym-table", DataTable).add_columns("Exercice", "Reps", "kg")
        self._render()

    def on_unmount(self) -> None:
        self._stop_interval()
        self.rest.cancel()

    def _render(self) -> None:
        table = self.query_one("#gym-table", DataTable)
        table.clear()
        for s in self.tracker.sets():
            table.add_row(s.exercise, str(s.reps), f"{s.kg:g}")
        self.query_one("#gym-volume", Static).update(f"Volume: {self.tracker.volume():g} kg")
        self._render_rest()

    def _render_rest(self) -> None:
        text = self.rest.display() if self.rest.running else f"repos {self.tracker.rest_seconds}s"
        self.query_one("#rest-display", Static).update(text)

    def _stop_interval(self) -> None:
        if self._interval is not None:
            self._interval.stop()
            self._interval = None

    def _tick(self) -> None:
        self.rest.tick()
        if not self.rest.running:
            self._stop_interval()
        self._render_rest()

    def _on_rest_done(self) -> None:
        self.app.bell()
        self.notify("Repos terminé", title="Musculation")

    @on(Button.Pressed, "#gym-add")
    def _on_add(self, event: Button.Pressed) -> None:
        exercise = self.query_one("#gym-exercise", Input).value
        reps = _parse(self.query_one("#gym-reps", Input).value)
        kg = _parse(self.query_one("#gym-kg", Input).value)
        if self.tracker.add_set(exercise, reps, kg):
            self._render()

    @on(Button.Pressed, "#gym-rest")
    def _on_rest(self, event: Button.Pressed) -> None:
        self._stop_interval()
        self.rest.start(self.tracker.rest_seconds)
        if self.rest.running:
            self._interval = self.set_interval(1, self._tick)
        self._render_rest()

    @on(Button.Pressed, "#gym-stop")
    def _on_stop(self, event: Button.Pressed) -> None:
        self._stop_interval()
        self.rest.cancel()
        self._render_rest()


class NutritionView(Vertical):
    def __init__(self, store: KeyStore, **kwargs) -> None:
        super().__init__(**kwargs)
        self.tracker = Nutrition(store)

    def compose(self) -> ComposeResult:
        yield Label("Nutrition", classes="section-title")
        yield Static(id="food-totals")
        yield Horizontal(
            Input(placeholder="Aliment", id="food-name"),
            Input(placeholder="kcal", id="food-kcal", type="number"),
            Input(placeholder="protéines (g)", id="food-protein", type="number"),
            Button("Ajouter", id="food-add"),
            classes="row",
        )
        yield DataTable(id="food-table", cursor_type="row")

    def on_mount(self) -> None:
        self.query_one("#food-table", DataTable).add_columns("Aliment", "kcal", "Protéines")
        self._render()

    def _render(self) -> None:
        totals = self.tracker.totals()
        goal = self.tracker.goal
        self.query_one("#food-totals", Static).update(
            f"{totals['kcal']:g} / {goal.kcal:g} kcal · {totals['protein']:g} / {goal.protein:g} g protéines"
        )
        table = self.query_one("#food-table", DataTable)
        table.clear()
        for item in self.tracker.items():
            table.add_row(item.name, f"{item.kcal:g}", f"{item.protein:g}")

    @on(Button.Pressed, "#food-add")
    def _on_add(self, event: Button.Pressed) -> None:
        name = self.query_one("#food-name", Input)
        kcal = _parse(self.query_one("#food-kcal", Input).value)
        protein = _parse(self.query_one("#food-protein", Input).value)
        if self.tracker.add_food(name.value, kcal, protein):
            name.value = ""
            self._render()


# ── Main app ───────────────────────────────────────────────────


class DisciplineApp(App):
    """Self-Discipline: habit tracker with a daily score."""

    TITLE = "Self-Discipline"
    CSS = CSS

    BINDINGS = [
        Binding("1", "show('dashboard')", "Dashboard"),
        Binding("2", "show('hydration')", "Hydratation"),
        Binding("3", "show('strength')", "Musculation"),
        Binding("4", "show('nutrition')", "Nutrition"),
        Binding("5", "show('sleep')", "Sommeil"),
        Binding("6", "show('grooming')", "Lookmaxing"),
        Binding("7", "show('notes')", "Notes"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, store: KeyStore | None = None) -> None:
        super().__init__()
        self.store = store or open_store()
        self.tabs = TabState(self.store)
        self._unsubscribers: list[Callable[[], None]] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with ContentSwitcher(initial=VIEW_IDS[self.tabs.current]):
            yield DashboardView(self.store, id="dashboard")
            yield VerticalScroll(HydrationView(self.store), id="hydration")
            yield VerticalScroll(StrengthView(self.store), id="strength")
            yield VerticalScroll(NutritionView(self.store), id="nutrition")
            yield VerticalScroll(SleepView(self.store), id="sleep")
            yield VerticalScroll(GroomingView(self.store), id="grooming")
            yield VerticalScroll(NotesView(self.store), id="notes")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.tabs.current
        for view_type in (HydrationView, StrengthView, NutritionView, SleepView, GroomingView, NotesView):
            for cell in self.query_one(view_type).tracker.cells():
                self._unsubscribers.append(cell.subscribe(self._on_change))

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _on_change(self, value: Any) -> None:
        self.query_one(DashboardView).refresh_score()

    def action_show(self, view: str) -> None:
        self.query_one(ContentSwitcher).current = view
        self.tabs.select(TAB_FOR_VIEW[view])
        self.sub_title = TAB_FOR_VIEW[view]


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    configure_logging(handlers=[TextualHandler()])
    root = workspace_root()
    if root.exists() and not root.is_dir():
        print(f"Workspace is not a directory: {root}")
        print("Set DISCIPLINE_ROOT to a directory.")
        sys.exit(1)

    app = DisciplineApp()
    app.run()


if __name__ == "__main__":
    main()
