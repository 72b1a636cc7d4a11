import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Extraction limits
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024)))  # 10,485,760 bytes
PREVIEW_LENGTH = int(os.getenv("PREVIEW_LENGTH", "500"))
XLSX_MAX_ROWS = int(os.getenv("XLSX_MAX_ROWS", "100"))  # Rows read per worksheet
PDF_MIN_TEXT_LENGTH = int(os.getenv("PDF_MIN_TEXT_LENGTH", "50"))  # Below this, PDF text is noise
PDF_MIN_RUN_LENGTH = int(os.getenv("PDF_MIN_RUN_LENGTH", "20"))  # Printable run length for fallback scan

# Rate Limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "100"))

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")


@dataclass(frozen=True)
class ExtractionLimits:
    """Tunable limits for one extraction engine instance."""
    max_file_size: int = MAX_FILE_SIZE
    preview_length: int = PREVIEW_LENGTH
    max_rows_per_sheet: int = XLSX_MAX_ROWS
    pdf_min_text_length: int = PDF_MIN_TEXT_LENGTH
    pdf_min_run_length: int = PDF_MIN_RUN_LENGTH


DEFAULT_LIMITS = ExtractionLimits()
