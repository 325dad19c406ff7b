import logging


def setup_logging(level: str = 'WARNING') -> None:
    logging.basicConfig(
        level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    # Silence noisy libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
