from typing import Hashable, Sequence, Tuple
import os
import logging

GRAPH_DIR_ENV = "KWSCAN_GRAPH_DIR"
LOG_ENV = "KWSCAN_LOG"
DEFAULT_GRAPH_DIR = "./logs/graphs"


# Configure the logger
def setup_logging(enabled=True):
    if enabled:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        logging.disable(logging.CRITICAL)  # Disables all logging


# Returns (logging enabled, graph output dir)
def read_env_configs() -> Tuple[bool, str]:
    log_enabled = os.environ.get(LOG_ENV, "").strip().lower() in ("1", "true", "yes")
    graph_dir = os.environ.get(GRAPH_DIR_ENV, DEFAULT_GRAPH_DIR)
    return log_enabled, graph_dir


def setup_logging_from_env():
    log_enabled, _ = read_env_configs()
    setup_logging(log_enabled)


# as_byte: the symbol came from iterating bytes, so show printable ones as chars
def symbol_repr(symbol: Hashable, as_byte: bool = False) -> str:
    if isinstance(symbol, str):
        return symbol
    if as_byte and isinstance(symbol, int) and 0x20 <= symbol < 0x7F:
        return chr(symbol)
    return repr(symbol)


def keyword_repr(keyword: Sequence[Hashable]) -> str:
    if isinstance(keyword, str):
        return keyword
    if isinstance(keyword, bytes):
        # Remove b'' from the string
        return f"{keyword!r}"[2:-1]
    return " ".join(repr(s) for s in keyword)
