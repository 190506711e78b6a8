"""Graph assembly — builds and compiles the per-turn conversation graph."""

from functools import partial
from typing import Optional

from langgraph.graph import StateGraph, START, END

from catalog.models import Catalog
from catalog.document_types import default_catalog
from graph.state import TurnState
from graph.router import route_turn, route_after_confirm
from graph.llm import DocumentGenerator, generate_document
from graph.conversation_nodes import (
    select_type_node,
    gathering_node,
    confirming_node,
    generate_node,
    complete_node,
)


def build_graph(catalog: Optional[Catalog] = None, generator: Optional[DocumentGenerator] = None):
    """
    Assemble the conversation graph. One invoke == one user turn; the caller
    keeps the ConversationState between turns, so no checkpointer is attached.
    """
    catalog = catalog or default_catalog()
    generator = generator or generate_document
    builder = StateGraph(TurnState)

    # ── Register phase nodes with the catalog bound in ──────────────
    for node_name, node in (
        ("select_type", select_type_node),
        ("gathering", gathering_node),
        ("confirming", confirming_node),
        ("complete", complete_node),
    ):
        node_func = partial(node, catalog=catalog)
        node_func.__name__ = node_name
        builder.add_node(node_name, node_func)

    generate_func = partial(generate_node, catalog=catalog, generator=generator)
    generate_func.__name__ = "generate"
    builder.add_node("generate", generate_func)

    # ── Entry: route on the incoming phase ──────────────────────────
    builder.add_conditional_edges(
        START,
        route_turn,
        {"select_type": "select_type", "gathering": "gathering", "confirming": "confirming", "complete": "complete"},
    )

    # ── Confirming may chain straight into generation ───────────────
    builder.add_conditional_edges("confirming", route_after_confirm, {"generate": "generate", "finish": END})

    for node_name in ("select_type", "gathering", "generate", "complete"):
        builder.add_edge(node_name, END)

    return builder.compile()
