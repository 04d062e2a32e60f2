from .stage_workflow import ReleaseStatus, StageWorkflowService, latest_outcome_per_kind

__all__ = ["ReleaseStatus", "StageWorkflowService", "latest_outcome_per_kind"]
