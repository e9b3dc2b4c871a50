"""Gateway that appends messages to a local log file instead of sending them."""

import json
import os
import tempfile
import threading
from datetime import datetime
from typing import Any, Dict

from easysms.gateways.base import BaseGateway
from easysms.models import Message, PhoneNumber

DEFAULT_LOG_FILE = "easy-sms-error.log"


class ErrorlogGateway(BaseGateway):
    """Write each message as one line of a log file.

    Useful in development and as a last-resort fallback so no message is
    silently lost. Configuration:
        file: Path of the log file (default: <tempdir>/easy-sms-error.log)
    """

    gateway_name = "errorlog"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._write_lock = threading.Lock()

    @property
    def file(self) -> str:
        return self.config.get_str("file") or os.path.join(
            tempfile.gettempdir(), DEFAULT_LOG_FILE
        )

    def send(self, to: PhoneNumber, message: Message) -> Dict[str, Any]:
        line = '[{}] to: {} | message: "{}" | template: "{}" | data: {}\n'.format(
            datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            to,
            message.get_content(self.name),
            message.get_template(self.name),
            json.dumps(message.get_data(self.name), ensure_ascii=False, default=str),
        )

        path = self.file
        with self._write_lock:
            with open(path, "a", encoding="utf-8") as f:
                f.write(line)

        self.logger.debug("message_written_to_log", file=path)
        return {"status": True, "file": path}
