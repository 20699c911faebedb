from src.studio.services.file_storage import FileStorage
from src.studio.services.invoice_service import ExportResult, InvoiceNumberCache, InvoiceService
from src.studio.services.project_service import ProjectService

__all__ = ["ExportResult", "FileStorage", "InvoiceNumberCache", "InvoiceService", "ProjectService"]
