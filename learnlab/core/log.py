import logging
from typing import Optional

from learnlab.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logging(level: Optional[str] = None):
    """
    Configures root logging for the API server and the CLI.
    """
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
    # The OpenAI client logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
