#!/usr/bin/env python3
"""
Othello Move Engine - Main Entry Point
"""

import logging

import uvicorn

from othellobot.config import CONFIG
from othellobot.logging_setup import setup_logging
from othellobot.server import app


def main():
    setup_logging(CONFIG.server.log_level)
    logger = logging.getLogger("othellobot")
    logger.info("Starting Othello move engine on http://%s:%d", CONFIG.server.host, CONFIG.server.port)
    logger.info("Search depth %d, %s evaluation", CONFIG.search.depth, CONFIG.eval.mode)

    uvicorn.run(
        app,
        host=CONFIG.server.host,
        port=CONFIG.server.port,
        log_level=CONFIG.server.log_level,
    )


if __name__ == "__main__":
    main()
