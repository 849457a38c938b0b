from .merge import merge_options
from .graph import ResourceGraph
from .expansion import MAIN_BRANCH, expand, expand_catalog, build_graph

__all__ = ['merge_options', 'ResourceGraph', 'MAIN_BRANCH', 'expand', 'expand_catalog', 'build_graph']
