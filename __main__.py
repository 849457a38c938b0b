"""Pulumi program: declares the powerd6 repositories and their governance policies."""
import pulumi

from powerd6_infra.config import Config
from powerd6_infra.engine import PulumiEngine
from powerd6_infra.stack import load_resources, setup_logging

setup_logging(Config.LOG_LEVEL)

resource_sets, graph = load_resources()

engine = PulumiEngine()
created = engine.submit(graph)

pulumi.export('repositories', [engine.outputs(resource_set, created) for resource_set in resource_sets])
