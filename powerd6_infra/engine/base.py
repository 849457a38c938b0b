from abc import ABC, abstractmethod
from typing import Any, Dict

from powerd6_infra.core.graph import ResourceGraph
from powerd6_infra.models import ManagedResourceSet


class ReconciliationEngine(ABC):
    """
    Abstract base class for the engines a resource graph is handed to.

    An engine owns everything that happens after the graph is built:
    diffing against actual state, applying changes, retries and state
    persistence. Implementations can target Pulumi or just render a plan.
    """

    @abstractmethod
    def submit(self, graph: ResourceGraph) -> Dict[str, Any]:
        """
        Hand the graph to the engine.

        Args:
            graph: Validated resource graph

        Returns:
            Mapping of resource id to whatever the engine tracks for it
        """
        pass

    @abstractmethod
    def outputs(self, resource_set: ManagedResourceSet, submitted: Dict[str, Any]) -> Dict[str, Any]:
        """
        Build the values exported for one repository.

        Args:
            resource_set: The repository's resources
            submitted: Result of a previous submit() call

        Returns:
            Dict with repository, branches, branch_protection, files and labels
        """
        pass
