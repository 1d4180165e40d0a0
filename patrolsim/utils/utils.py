import json
import sys
import typing as t
from datetime import datetime


def timestamp_string():
    return datetime.now().strftime("%Y-%m-%d-%Hh%Mm%Ss_%f")


class PatrolLog:
    def __init__(self, message: str, step: int, timestamp: str | None = None):
        self.message = message
        self.step = step
        self.timestamp = timestamp if timestamp is not None else timestamp_string()

    def __str__(self):
        return "At step {}: '{}'".format(self.step, self.message)

    def toJSON(self):
        return json.dumps(self, default=lambda o: o.__dict__, sort_keys=True, indent=4)


class PatrolLogger(list[PatrolLog]):
    """Keeps every log entry in memory and echoes them to stderr when `printout` is set.

    Diagnostics go to stderr so that stdout only carries results.
    """

    def __init__(self, printout: bool = True, stream: t.TextIO | None = None):
        super(PatrolLogger, self).__init__()
        self.printout = printout
        self.stream = stream

    def append(self, log: PatrolLog):
        super(PatrolLogger, self).append(log)
        if self.printout:
            print(log.message, file=self.stream or sys.stderr)

    def messages(self) -> t.List[str]:
        return [x.message for x in self]
