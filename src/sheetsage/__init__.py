"""SheetSage - Gemini assistant that reads and edits Google Sheets workbooks."""

__version__ = "0.1.0"
