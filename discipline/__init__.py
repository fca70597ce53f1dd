"""Discipline core library: persistent key store, day-keyed logs, daily score.

Public API re-exports for convenient imports:
    from discipline import open_store, Hydration, compute_score, ...
"""

# Workspace & paths
from discipline.workspace import (
    workspace_root,
    profile_path,
    store_dir,
    load_profile,
    get_user_timezone,
)

# Store
from discipline.store import (
    KeyStore,
    FileBackend,
    MemoryBackend,
    ReadResult,
    StorageUnavailable,
    CorruptValue,
    open_store,
    validate_key,
)

# Cells & logs
from discipline.cell import Cell, create_cell
from discipline.dailylog import DailyLog
from discipline.days import day_key, day_key_offset, last_days, days_ending, weekday_label

# Modules
from discipline.habits import HabitModule, ModuleRegistry, HabitTracker
from discipline.hydration import Hydration
from discipline.sleep import Sleep
from discipline.notes import Notes
from discipline.grooming import Grooming
from discipline.strength import Strength
from discipline.nutrition import Nutrition
from discipline.tabs import TabState, TABS
from discipline.timer import RestTimer

# Dashboard
from discipline.dashboard import (
    default_registry,
    module_weight,
    compute_score,
    score_breakdown,
    score_history,
)

# Models
from discipline.models import (
    Profile,
    NoteItem,
    LiftSet,
    FoodItem,
    NutritionGoal,
    ChartPoint,
    ModuleScore,
    ScoreCard,
)
