# AI-generated image detection package

import logging
from typing import Optional

from .detector import AIImageDetectionPipeline
from .models import AILikelihood, AnalysisResult
from .response_parser import parse_analysis_text
from .utils.cache import ResultCache, MAX_CACHE_SIZE

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level=logging.INFO, log_file: Optional[str] = None):
    """Configure logging for the application entry points"""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)


__all__ = [
    'AIImageDetectionPipeline',
    'AILikelihood',
    'AnalysisResult',
    'ResultCache',
    'MAX_CACHE_SIZE',
    'parse_analysis_text',
    'configure_logging',
]
