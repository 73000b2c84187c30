"""LangGraph construction and node implementations.

The graph is strictly linear: resolve -> assemble -> invoke -> normalize.
Parsing happens before the graph runs; errors raised by a node propagate
out of ``invoke`` unchanged and are mapped by the request handler.
"""

from __future__ import annotations

from typing import Dict

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from mentor_core.flows.state import PipelineState
from mentor_core.infrastructure.logging.logger import logger
from mentor_core.prompts import assemble_messages
from mentor_core.prompts.modes import resolve_mode
from mentor_core.providers.base import ProviderClient


def resolve_node(state: PipelineState) -> Dict[str, object]:
    request = state["request"]
    profile = resolve_mode(request.mode)
    logger.info("resolve_node", extra={"extra": {"mode": profile.mode.value, "raw_mode": request.raw_mode}})
    return {"profile": profile}


def assemble_node(state: PipelineState) -> Dict[str, object]:
    request = state["request"]
    outbound = assemble_messages(request.turns, state["profile"].task_instruction, request.raw_mode)
    logger.info("assemble_node", extra={"extra": {"messages": len(outbound)}})
    return {"outbound": outbound}


def invoke_node(state: PipelineState, provider: ProviderClient) -> Dict[str, object]:
    logger.info("invoke_node.start", extra={"extra": {"provider": provider.name}})
    result = provider.chat(state["outbound"])
    logger.info(
        "invoke_node.end",
        extra={"extra": {"model": result.model, "tokens_used": result.tokens_used}},
    )
    return {"result": result}


def normalize_node(state: PipelineState) -> Dict[str, object]:
    result = state["result"]
    return {
        "response": {
            "result": result.text,
            "metadata": {
                "mode": state["request"].raw_mode,
                "tokens_used": result.tokens_used,
                "model": result.model,
            },
        }
    }


def build_graph(provider: ProviderClient) -> CompiledStateGraph:
    graph = StateGraph(PipelineState)
    graph.add_node("resolve", resolve_node)
    graph.add_node("assemble", assemble_node)
    graph.add_node("invoke", lambda s: invoke_node(s, provider))
    graph.add_node("normalize", normalize_node)
    graph.set_entry_point("resolve")
    graph.add_edge("resolve", "assemble")
    graph.add_edge("assemble", "invoke")
    graph.add_edge("invoke", "normalize")
    graph.add_edge("normalize", END)
    return graph.compile()
