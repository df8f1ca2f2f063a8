"""Testing fakes – in-memory doubles for application ports."""
from vegadmin.testing.fakes.search import ScriptedSearchBackend, SearchCall
from vegadmin.testing.fakes.timer import ManualTimer, ManualTimerHandle

__all__ = ["ManualTimer", "ManualTimerHandle", "ScriptedSearchBackend", "SearchCall"]
