"""LangGraph state machine wiring.

State flows:

  fetch_task -> [route_after_task] --(missing)--------------------+
      |             (error) -> fail                               |
      |                                                           |
  fetch_image -> [route_after_image] --(missing)----------------> expire
      |                 |
      |              (error)-------------------+
      |                                        |
  adapt_image -> [route_after_adapt] --(error)--> fail
      |                                        |
  run_search -> [route_after_search] --(error)-+
      |
    finish

  finish / fail / expire -> END
"""

from langgraph.graph import END, StateGraph

from revsearch.pipeline.nodes import (
    SearchNodes,
    route_after_adapt,
    route_after_image,
    route_after_search,
    route_after_task,
)
from revsearch.pipeline.state import SearchState


def build_graph(nodes: SearchNodes):
    """Construct and compile the search graph.  Returns a runnable."""
    g = StateGraph(SearchState)

    # -- add nodes ----------------------------------------------------------
    g.add_node("fetch_task", nodes.fetch_task)
    g.add_node("fetch_image", nodes.fetch_image)
    g.add_node("adapt_image", nodes.adapt_image)
    g.add_node("run_search", nodes.run_search)
    g.add_node("finish", nodes.finish)
    g.add_node("fail", nodes.fail)
    g.add_node("expire", nodes.expire)

    # -- edges --------------------------------------------------------------
    g.set_entry_point("fetch_task")
    g.add_conditional_edges(
        "fetch_task",
        route_after_task,
        {"fetch_image": "fetch_image", "expire": "expire", "fail": "fail"},
    )
    g.add_conditional_edges(
        "fetch_image",
        route_after_image,
        {"adapt_image": "adapt_image", "expire": "expire", "fail": "fail"},
    )
    g.add_conditional_edges(
        "adapt_image",
        route_after_adapt,
        {"run_search": "run_search", "fail": "fail"},
    )
    g.add_conditional_edges(
        "run_search",
        route_after_search,
        {"finish": "finish", "fail": "fail"},
    )

    # Terminal states
    g.add_edge("finish", END)
    g.add_edge("fail", END)
    g.add_edge("expire", END)

    return g.compile()
