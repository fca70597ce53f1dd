from __future__ import annotations

import os
import secrets
from typing import Any

from fastapi import Body, Depends, FastAPI, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from discipline import (
    TABS,
    Grooming,
    Hydration,
    Notes,
    Nutrition,
    Sleep,
    Strength,
    TabState,
    load_profile,
    open_store,
    score_breakdown,
    score_history,
)
from discipline.hydration import QUICK_ADD_ML, UNDO_ML
from discipline.logging_config import configure_logging

configure_logging()

CSS = """
body { font-family: system-ui, sans-serif; background: #f6f6f7; color: #111; margin: 0; }
.container { max-width: 960px; margin: 0 auto; padding: 16px; }
header.top { display: flex; justify-content: space-between; align-items: center; }
nav button { margin-right: 8px; padding: 4px 10px; border-radius: 12px; border: 1px solid #ccc; text-decoration: none; color: inherit; }
nav button.active { background: #111; color: #fff; border-color: #111; }
.card { background: #fff; border-radius: 16px; padding: 16px 20px; margin: 16px 0; box-shadow: 0 1px 3px rgba(0,0,0,.08); }
.score { font-size: 48px; font-weight: 700; }
.bar { height: 10px; background: #e5e5e5; border-radius: 6px; overflow: hidden; }
.bar > div { height: 100%; background: #111; }
.chart { display: grid; grid-template-columns: repeat(7, 1fr); gap: 6px; align-items: end; height: 120px; }
.chart .col { background: #e5e5e5; border-radius: 4px; height: 100px; display: flex; align-items: flex-end; }
.chart .col > div { width: 100%; background: #111; border-radius: 4px; }
.muted { color: #777; } .small { font-size: 13px; }
form.inline { display: inline; }
.done { text-decoration: line-through; color: #777; }
"""


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: Any) -> str:
    return (
        str(s).replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _bar(pct: int) -> str:
    return f'<div class="bar"><div style="width:{int(pct)}%"></div></div>'


def _chart(points) -> str:
    cols = []
    for p in points:
        cols.append(
            f'<div><div class="col"><div style="height:{int(p.pct)}%"></div></div>'
            f'<div class="muted small">{_escape(p.label)}</div></div>'
        )
    return '<div class="chart">' + "".join(cols) + "</div>"


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="Discipline UI", version="0.1.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("DISCIPLINE_USERNAME", "")
    expected_password = os.environ.get("DISCIPLINE_PASSWORD", "")

    if credentials is None:
        if not expected_username or not expected_password:
            return "guest"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    if not expected_username or not expected_password:
        return "guest"

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


def _weight() -> int | None:
    return load_profile().score_weight


# ── Pages ─────────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


def _dashboard_html(store) -> str:
    card = score_breakdown(store, weight=_weight())
    rows = "".join(
        f"<li>{'✅' if m.done else '⬜'} {_escape(m.title)} <span class=\"muted small\">+{m.weight}</span></li>"
        for m in card.modules
    )
    return f"""
    <section class="card">
      <h2>Score du jour</h2>
      <div class="score">{card.total}</div>
      {_bar(card.total)}
      <ul>{rows}</ul>
    </section>
    <section class="card">
      <h2>Historique (7 jours)</h2>
      {_chart(score_history(store, weight=_weight()))}
    </section>"""


def _hydration_html(store) -> str:
    h = Hydration(store)
    ml, goal, pct = h.progress()
    buttons = "".join(
        f'<form class="inline" method="post" action="/hydration/add"><input type="hidden" name="amount" value="{a}" />'
        f'<button>{"+" if a > 0 else "–"}{abs(a)} mL</button></form>'
        for a in [*QUICK_ADD_ML, UNDO_ML]
    )
    return f"""
    <section class="card">
      <h2>Hydratation quotidienne</h2>
      <div class="small">{ml:g} mL / {goal:g} mL ({pct}%)</div>
      {_bar(pct)}
      <p>{buttons}</p>
    </section>
    <section class="card"><h2>Historique (7 jours)</h2>{_chart(h.history())}</section>"""


def _sleep_html(store) -> str:
    s = Sleep(store)
    return f"""
    <section class="card">
      <h2>Sommeil</h2>
      <div class="small">{s.hours():g} h / {s.goal:g} h {'✅' if s.done() else ''}</div>
      <form method="post" action="/sleep/log">
        <input type="number" name="hours" min="0" max="24" step="0.25" value="{s.hours():g}" />
        <button>Enregistrer</button>
      </form>
    </section>
    <section class="card"><h2>Historique (7 jours)</h2>{_chart(s.history())}</section>"""


def _grooming_html(store) -> str:
    g = Grooming(store)
    done, total = g.completion()
    rows = "".join(
        f'<li><form class="inline" method="post" action="/grooming/toggle">'
        f'<input type="hidden" name="task" value="{_escape(task)}" />'
        f'<button>{"✅" if flag else "⬜"}</button></form> {_escape(task)}</li>'
        for task, flag in g.checked().items()
    )
    return f"""
    <section class="card">
      <h2>Lookmaxing</h2>
      <div class="small">{done}/{total}</div>
      <ul>{rows}</ul>
    </section>"""


def _notes_html(store) -> str:
    n = Notes(store)
    cats = " ".join(
        f'<form class="inline" method="post" action="/notes/active"><input type="hidden" name="name" value="{_escape(c)}" />'
        f'<button{" disabled" if c == n.active else ""}>{_escape(c)}</button></form>'
        for c in n.categories
    )
    items = "".join(
        f'<li><span class="{"done" if i.done else ""}">{_escape(i.text)}</span> '
        f'<form class="inline" method="post" action="/notes/delete"><input type="hidden" name="item_id" value="{_escape(i.id)}" />'
        f"<button>✕</button></form></li>"
        for i in n.items()
    )
    return f"""
    <section class="card">
      <h2>Notes</h2>
      <p>{cats}</p>
      <form method="post" action="/notes/add"><input type="text" name="text" placeholder="Nouvelle note" /><button>Ajouter</button></form>
      <ul>{items or '<li class="muted small">(vide)</li>'}</ul>
    </section>"""


def _strength_html(store) -> str:
    s = Strength(store)
    rows = "".join(f"<li>{_escape(x.exercise)}: {x.reps} × {x.kg:g} kg</li>" for x in s.sets())
    return f"""
    <section class="card">
      <h2>Musculation</h2>
      <div class="small">Volume: {s.volume():g} kg · Repos: {s.rest_seconds}s</div>
      <ul>{rows or '<li class="muted small">(aucune série)</li>'}</ul>
    </section>
    <section class="card"><h2>Volume (7 jours)</h2>{_chart(s.history())}</section>"""


def _nutrition_html(store) -> str:
    n = Nutrition(store)
    totals = n.totals()
    goal = n.goal
    rows = "".join(f"<li>{_escape(i.name)}: {i.kcal:g} kcal, {i.protein:g} g</li>" for i in n.items())
    return f"""
    <section class="card">
      <h2>Nutrition</h2>
      <div class="small">{totals['kcal']:g} / {goal.kcal:g} kcal · {totals['protein']:g} / {goal.protein:g} g protéines</div>
      <ul>{rows or '<li class="muted small">(rien de noté)</li>'}</ul>
    </section>"""


VIEWS = {
    "Dashboard": _dashboard_html,
    "Hydratation": _hydration_html,
    "Musculation": _strength_html,
    "Nutrition": _nutrition_html,
    "Sommeil": _sleep_html,
    "Lookmaxing": _grooming_html,
    "Notes": _notes_html,
}


@app.get("/", response_class=HTMLResponse)
def index(username: str = Depends(get_current_user)) -> HTMLResponse:
    store = open_store()
    current = TabState(store).current
    nav = "".join(
        f'<form class="inline" method="post" action="/tab"><input type="hidden" name="tab" value="{_escape(t)}" />'
        f'<button class="{"active" if t == current else ""}">{_escape(t)}</button></form>'
        for t in TABS
    )
    html = f"""<!doctype html>
<html lang="fr">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Self-Discipline</title>
  <style>{CSS}</style>
</head>
<body>
  <div class="container">
    <header class="top"><h1>∆ Self-Discipline</h1></header>
    <nav>{nav}</nav>
    {VIEWS[current](store)}
    <footer class="muted small">Hors ligne, données stockées localement.</footer>
  </div>
</body>
</html>"""
    return HTMLResponse(html)


def _back() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@app.post("/tab")
def form_tab(tab: str = Form(...), username: str = Depends(get_current_user)) -> RedirectResponse:
    TabState(open_store()).select(tab)
    return _back()


@app.post("/hydration/add")
def form_hydration_add(amount: float = Form(...), username: str = Depends(get_current_user)) -> RedirectResponse:
    Hydration(open_store()).add(amount)
    return _back()


@app.post("/sleep/log")
def form_sleep_log(hours: float = Form(...), username: str = Depends(get_current_user)) -> RedirectResponse:
    Sleep(open_store()).log_hours(hours)
    return _back()


@app.post("/grooming/toggle")
def form_grooming_toggle(task: str = Form(...), username: str = Depends(get_current_user)) -> RedirectResponse:
    Grooming(open_store()).toggle(task)
    return _back()


@app.post("/notes/add")
def form_notes_add(text: str = Form(""), username: str = Depends(get_current_user)) -> RedirectResponse:
    Notes(open_store()).add_item(text)
    return _back()


@app.post("/notes/active")
def form_notes_active(name: str = Form(...), username: str = Depends(get_current_user)) -> RedirectResponse:
    Notes(open_store()).set_active(name)
    return _back()


@app.post("/notes/delete")
def form_notes_delete(item_id: str = Form(...), username: str = Depends(get_current_user)) -> RedirectResponse:
    Notes(open_store()).delete_item(item_id)
    return _back()


# ══════════════════════════════════════════════════════════════
# JSON API
# ══════════════════════════════════════════════════════════════

@app.get("/api/score")
def api_score(username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Today's score with per-module breakdown and the 7-day history."""
    store = open_store()
    card = score_breakdown(store, weight=_weight())
    data = card.to_dict()
    data["history"] = [p.to_dict() for p in score_history(store, weight=_weight())]
    return data


@app.get("/api/state")
def api_state(prefix: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Raw dump of every readable store key."""
    return open_store().dump(prefix)


@app.post("/api/tab")
def api_tab(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    tab = str(payload.get("tab", ""))
    if tab not in TABS:
        raise HTTPException(status_code=400, detail=f"Unknown tab: {tab}")
    return {"ok": True, "tab": TabState(open_store()).select(tab)}


# ── Hydration ──

def _hydration_state(h: Hydration) -> dict[str, Any]:
    ml, goal, pct = h.progress()
    return {
        "day": h.today_key(),
        "ml": ml,
        "goal": goal,
        "pct": pct,
        "done": h.done(),
        "history": [p.to_dict() for p in h.history()],
    }


@app.get("/api/hydration")
def api_hydration(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _hydration_state(Hydration(open_store()))


@app.post("/api/hydration/add")
def api_hydration_add(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    h = Hydration(open_store())
    h.add(payload.get("amount", 0))
    return _hydration_state(h)


@app.post("/api/hydration/goal")
def api_hydration_goal(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    h = Hydration(open_store())
    h.set_goal(payload.get("ml"))
    return _hydration_state(h)


# ── Sleep ──

def _sleep_state(s: Sleep) -> dict[str, Any]:
    return {
        "day": s.today_key(),
        "hours": s.hours(),
        "goal": s.goal,
        "done": s.done(),
        "history": [p.to_dict() for p in s.history()],
    }


@app.get("/api/sleep")
def api_sleep(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _sleep_state(Sleep(open_store()))


@app.post("/api/sleep")
def api_sleep_log(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    s = Sleep(open_store())
    s.log_hours(payload.get("hours", 0))
    return _sleep_state(s)


@app.post("/api/sleep/goal")
def api_sleep_goal(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    s = Sleep(open_store())
    s.set_goal(payload.get("hours"))
    return _sleep_state(s)


# ── Notes ──

def _notes_state(n: Notes) -> dict[str, Any]:
    return {
        "categories": n.categories,
        "active": n.active,
        "items": {c: [i.to_dict() for i in n.items(c)] for c in n.categories},
    }


@app.get("/api/notes")
def api_notes(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _notes_state(Notes(open_store()))


@app.post("/api/notes/items")
def api_notes_add(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    n = Notes(open_store())
    item = n.add_item(str(payload.get("text", "")), payload.get("category"))
    if item is None:
        raise HTTPException(status_code=400, detail="Empty text or unknown category")
    return {"ok": True, "item": item.to_dict()}


@app.post("/api/notes/items/{item_id}/toggle")
def api_notes_toggle(item_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    n = Notes(open_store())
    if not n.toggle_item(item_id):
        raise HTTPException(status_code=404, detail=f"Note not found: {item_id}")
    return _notes_state(n)


@app.delete("/api/notes/items/{item_id}")
def api_notes_delete(item_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    n = Notes(open_store())
    if not n.delete_item(item_id):
        raise HTTPException(status_code=404, detail=f"Note not found: {item_id}")
    return _notes_state(n)


@app.post("/api/notes/categories")
def api_notes_category(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    n = Notes(open_store())
    if not n.add_category(str(payload.get("name", ""))):
        raise HTTPException(status_code=400, detail="Empty or duplicate category")
    return _notes_state(n)


@app.post("/api/notes/active")
def api_notes_active(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    n = Notes(open_store())
    if not n.set_active(str(payload.get("name", ""))):
        raise HTTPException(status_code=404, detail="Unknown category")
    return _notes_state(n)


# ── Grooming ──

def _grooming_state(g: Grooming) -> dict[str, Any]:
    done, total = g.completion()
    return {"day": g.today_key(), "tasks": g.checked(), "completed": done, "total": total, "done": g.done()}


@app.get("/api/grooming")
def api_grooming(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _grooming_state(Grooming(open_store()))


@app.post("/api/grooming/toggle")
def api_grooming_toggle(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    g = Grooming(open_store())
    task = str(payload.get("task", ""))
    if g.toggle(task) is None:
        raise HTTPException(status_code=404, detail=f"Unknown task: {task}")
    return _grooming_state(g)


@app.post("/api/grooming/tasks")
def api_grooming_add_task(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    g = Grooming(open_store())
    if not g.add_task(str(payload.get("name", ""))):
        raise HTTPException(status_code=400, detail="Empty or duplicate task")
    return _grooming_state(g)


@app.delete("/api/grooming/tasks/{name}")
def api_grooming_remove_task(name: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    g = Grooming(open_store())
    if not g.remove_task(name):
        raise HTTPException(status_code=404, detail=f"Unknown task: {name}")
    return _grooming_state(g)


# ── Strength ──

def _strength_state(s: Strength) -> dict[str, Any]:
    return {
        "day": s.today_key(),
        "sets": [x.to_dict() for x in s.sets()],
        "volume": s.volume(),
        "rest_seconds": s.rest_seconds,
        "done": s.done(),
    }


@app.get("/api/strength")
def api_strength(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _strength_state(Strength(open_store()))


@app.post("/api/strength/sets")
def api_strength_add(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    s = Strength(open_store())
    if s.add_set(str(payload.get("exercise", "")), payload.get("reps", 0), payload.get("kg", 0)) is None:
        raise HTTPException(status_code=400, detail="Missing exercise")
    return _strength_state(s)


@app.delete("/api/strength/sets/{index}")
def api_strength_remove(index: int, username: str = Depends(get_current_user)) -> dict[str, Any]:
    s = Strength(open_store())
    if not s.remove_set(index):
        raise HTTPException(status_code=404, detail=f"No set at index {index}")
    return _strength_state(s)


@app.post("/api/strength/rest")
def api_strength_rest(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    s = Strength(open_store())
    s.set_rest(payload.get("seconds"))
    return _strength_state(s)


# ── Nutrition ──

def _nutrition_state(n: Nutrition) -> dict[str, Any]:
    return {
        "day": n.today_key(),
        "items": [i.to_dict() for i in n.items()],
        "totals": n.totals(),
        "goal": n.goal.to_dict(),
    }


@app.get("/api/nutrition")
def api_nutrition(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _nutrition_state(Nutrition(open_store()))


@app.post("/api/nutrition/items")
def api_nutrition_add(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    n = Nutrition(open_store())
    if n.add_food(str(payload.get("name", "")), payload.get("kcal", 0), payload.get("protein", 0)) is None:
        raise HTTPException(status_code=400, detail="Missing name")
    return _nutrition_state(n)


@app.delete("/api/nutrition/items/{index}")
def api_nutrition_remove(index: int, username: str = Depends(get_current_user)) -> dict[str, Any]:
    n = Nutrition(open_store())
    if not n.remove_food(index):
        raise HTTPException(status_code=404, detail=f"No item at index {index}")
    return _nutrition_state(n)


@app.post("/api/nutrition/goal")
def api_nutrition_goal(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    n = Nutrition(open_store())
    n.set_goal(payload.get("kcal"), payload.get("protein"))
    return _nutrition_state(n)
