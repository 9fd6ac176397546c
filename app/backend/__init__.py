"""
Rental Application Extraction Backend.

A FastAPI service that extracts confidence-scored applicant fields
(name, email, phone, move-in date, property, unit, rent, application date)
from rental application PDFs.
"""

__version__ = "1.0.0"
