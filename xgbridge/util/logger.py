import sys
from loguru import logger

# Remove default handler (to avoid double printing)
logger.remove()

# Console: level, module, function and line for every record
logger.add(
    sys.stderr,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level="INFO"
)

# Debug trail of builds, handle lifetimes and training rounds
logger.add(
    "logs/xgbridge.log",
    rotation="10MB",
    retention="10 days",
    level="DEBUG",
    compression="zip"
)

__all__ = ["logger"]
