"""Testing support – deterministic fakes for search screens."""

from vegadmin.testing.fakes import ManualTimer, ManualTimerHandle, ScriptedSearchBackend, SearchCall

__all__ = ["ManualTimer", "ManualTimerHandle", "ScriptedSearchBackend", "SearchCall"]
