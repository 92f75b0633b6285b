#!/usr/bin/env python3
"""
Flask REST API entry point for the WorkSphere AI assistant.

Configuration comes from environment variables (a local .env file is loaded
when present).
"""
import os
import logging

from worksphere_assistant import create_app, load_config_from_env

config = load_config_from_env()

logging.basicConfig(
    level=config.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

app = create_app(config)


if __name__ == "__main__":
    port = int(os.getenv("PORT", 7860))
    app.run(host="0.0.0.0", port=port, debug=False)
