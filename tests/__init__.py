import logging

logger = logging.getLogger("object_mapper")
logger.setLevel(logging.DEBUG)
