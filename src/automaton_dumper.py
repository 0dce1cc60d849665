from graphviz import Digraph
from AhoCorasick import AhoCorasick
import kw_common as kwc
from typing import Optional
import logging
import os


def _escape(label: str) -> str:
    # graphviz treats backslashes in labels as escape sequences
    return label.replace("\\", "\\\\")


def state_label(ac: AhoCorasick, state: int) -> str:
    lines = [f"{state}"]
    for kw_idx in ac.terminals_of(state):
        lines.append(_escape(f"[{kw_idx}] {kwc.keyword_repr(ac.keywords[kw_idx])}"))
    return "\\n".join(lines)


def make_graph(ac: AhoCorasick, show_root_failures: bool = False) -> Digraph:
    """
    Goto edges are solid and labelled by their symbol, failure links are
    dashed. States where a keyword ends are drawn as double circles.
    Failure links to the root are left out unless show_root_failures is set.
    """
    ac.build()
    dg = Digraph(format="svg")
    dg.attr(rankdir="LR")
    dg.attr(newrank="true")

    for state in range(ac.num_states):
        shape = "doublecircle" if ac.terminals_of(state) else "circle"
        dg.node(str(state), label=state_label(ac, state), shape=shape)

    as_byte = bool(ac.keywords) and all(isinstance(kw, bytes) for kw in ac.keywords)
    for state in range(ac.num_states):
        for char, dst in ac.goto_edges(state).items():
            label = _escape(kwc.symbol_repr(char, as_byte))
            dg.edge(str(state), str(dst), label=label)

    for state in range(1, ac.num_states):
        fail = ac.failure_of(state)
        if fail == 0 and not show_root_failures:
            continue
        dg.edge(str(state), str(fail), style="dashed", color="red", constraint="false")
    return dg


def dump(
    ac: AhoCorasick,
    name: str = "automaton",
    out_dir: Optional[str] = None,
    max_states: int = 300,
) -> Optional[str]:
    """Render the automaton to <out_dir>/<name>.svg. Returns the written path."""
    if ac.num_states > max_states:
        logging.warning(
            f"Too many states to visualize ({ac.num_states} > {max_states})"
        )
        return None
    if out_dir is None:
        _, out_dir = kwc.read_env_configs()
    os.makedirs(out_dir, exist_ok=True)

    dg = make_graph(ac)
    path = dg.render(os.path.join(out_dir, name), format="svg", cleanup=True)
    logging.info(f"Automaton graph written to {path}")
    return path
