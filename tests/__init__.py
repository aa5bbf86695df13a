# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import ScriptedProvider, FakeWeb
"""

from .utils import FakeWeb, ScriptedProvider, make_candidate

__all__ = ["FakeWeb", "ScriptedProvider", "make_candidate"]
