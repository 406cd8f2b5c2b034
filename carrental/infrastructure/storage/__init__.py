from carrental.infrastructure.storage.file_draft_storage import FileDraftStorage

__all__ = ["FileDraftStorage"]
