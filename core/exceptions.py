"""Error taxonomy for dataset loading, uploads and report downloads."""


class EquipmentAnalyticsError(Exception):
    """Base class for errors surfaced to the user."""


class LoadFailure(EquipmentAnalyticsError):
    """Fetching a dataset or its summary failed; nothing was applied."""

    def __init__(self, dataset_id, message: str = "Failed to load dataset"):
        super().__init__(message)
        self.dataset_id = dataset_id


class UploadFailure(EquipmentAnalyticsError):
    """The upload was rejected locally or by the backend."""


class ReportFailure(EquipmentAnalyticsError):
    """The generated report could not be downloaded."""
