from resource_manager.mutation.coordinator import MutationCoordinator

__all__ = ["MutationCoordinator"]
