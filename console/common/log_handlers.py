######################################################################
# Copyright 2016, 2024 John J. Rofrano. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
######################################################################
"""
Log Handlers

This module contains utility functions to set up logging
consistently
"""
import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(module)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def init_logging(app, logger_name: str):
    """Set up logging for production

    Reuses the handlers of logger_name (gunicorn's error log) when the app
    runs under gunicorn, and a plain stream handler otherwise.
    """
    app.logger.propagate = False
    server_logger = logging.getLogger(logger_name)
    if server_logger.handlers:
        app.logger.handlers = server_logger.handlers
        app.logger.setLevel(server_logger.level)
    else:
        app.logger.handlers = [logging.StreamHandler()]
        app.logger.setLevel(app.config.get("LOG_LEVEL", logging.INFO))
    # Make all log formats consistent
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in app.logger.handlers:
        handler.setFormatter(formatter)
    app.logger.info("Logging handler established")
