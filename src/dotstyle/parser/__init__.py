from dotstyle.parser.errors import ParseError
from dotstyle.parser.transformer import expand_edge_chain, extract_node_ids, parse_graph

__all__ = ["ParseError", "parse_graph", "expand_edge_chain", "extract_node_ids"]
