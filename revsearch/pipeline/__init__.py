"""Pipeline module -- LangGraph state machine for search tasks."""

from revsearch.pipeline.graph import build_graph
from revsearch.pipeline.orchestrator import SearchOrchestrator
from revsearch.pipeline.state import SearchState

__all__ = ["build_graph", "SearchOrchestrator", "SearchState"]
