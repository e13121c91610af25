# wavefront3d/utils/logger.py
# ---------------------------------------------------------------
# Общий логгер пакета. Сообщения помечаются тегом компонента:
# "[Loader] ...", "[MTL] ...", "[Assembler] ...".
# ---------------------------------------------------------------

import logging

LOGGER_NAME = "Wavefront3D"


def init_logger(level: int = logging.INFO) -> logging.Logger:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return logging.getLogger(LOGGER_NAME)


logger = init_logger()
