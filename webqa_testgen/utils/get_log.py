import logging
import os
from datetime import datetime
from logging import WARNING, FileHandler
from logging.handlers import TimedRotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [%(filename)s (%(funcName)s:%(lineno)d)] - %(message)s"


class GetLog:
    logger = None
    log_folder = None

    @classmethod
    def get_log(cls, log_level="info", shared_log_folder=None):
        """Get logger and initialize logging system.

        Args:
            log_level (str): Root and console level name, default is ``info``
            shared_log_folder (str): Log folder to reuse instead of ``./logs/<timestamp>``
        """
        if cls.logger is None:
            if shared_log_folder:
                cls.log_folder = shared_log_folder
            else:
                current_time = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
                cls.log_folder = os.path.join("./logs", current_time)
                os.environ["WEBQA_TIMESTAMP"] = current_time

            os.makedirs(cls.log_folder, exist_ok=True)

            level = getattr(logging, str(log_level).upper(), logging.INFO)
            cls.logger = logging.getLogger()
            cls.logger.setLevel(level)
            fm = logging.Formatter(LOG_FORMAT)

            # main log file
            th = TimedRotatingFileHandler(
                filename=os.path.join(cls.log_folder, "log.log"),
                when="midnight",
                interval=1,
                backupCount=3,
                encoding="utf-8",
            )
            th.setLevel(level)
            th.setFormatter(fm)
            cls.logger.addHandler(th)

            error_handler = FileHandler(filename=os.path.join(cls.log_folder, "error.log"), encoding="utf-8")
            error_handler.setLevel(WARNING)
            error_handler.setFormatter(fm)
            cls.logger.addHandler(error_handler)

            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(fm)
            cls.logger.addHandler(console_handler)

        return cls.logger
