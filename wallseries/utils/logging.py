import sys
from loguru import logger

_initialized = False


def setup_logging(level="INFO", show_time=True):
    """Configure loguru for the project.
    
    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
    show_time : bool
        Whether to show timestamps in the output.
    """
    # Remove default handler
    logger.remove()
    
    if show_time:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        )
    else:
        log_format = (
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        )
        
    logger.add(sys.stderr, format=log_format, level=level, colorize=True)
    
    return logger


def initialize(level="INFO", show_time=True):
    """Process startup for programs using transient walls.
    
    Configures logging and announces the module once per process. Call
    from the program entry point; importing the package does not log.
    """
    global _initialized
    
    setup_logging(level=level, show_time=show_time)
    if not _initialized:
        logger.info("Transient viscous wall module loaded (adiabatic, Twall, qwall)")
        _initialized = True
    
    return logger
