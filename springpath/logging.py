"""
Module containing the `Loggable` class, which provides a simple logging system.
"""

import datetime

class Loggable:

    INDENT = "  "

    def __init__(self) -> None:
        self._log = []

    def log(self, message: str, indent_level: int = 0) -> None:
        if message == "":
            return
        if indent_level > 0:
            message = "\n".join(self.INDENT * indent_level + line for line in message.split("\n"))
        self._log.append(message)

    def get_log(self, indent_level: int = 0) -> str:
        if indent_level <= 0:
            return "\n".join(self._log)
        return "\n".join(self.INDENT * indent_level + line for line in "\n".join(self._log).split("\n"))

    def log_lines(self, lines: list[str], indent_level: int = 0) -> None:
        for line in lines:
            self.log(line, indent_level)

    def clear_log(self) -> None:
        self._log = []

    def write_log_to_file(self, filepath: str) -> str:
        """
        Writes the collected log to a dated copy of `filepath` and returns the path written.
        """
        date = datetime.datetime.now().strftime("%d-%m-%Y")

        filename_parts = filepath.rsplit('.', 1)
        dated_filepath = f"{filename_parts[0]}_{date}"
        if len(filename_parts) > 1:
            dated_filepath += f".{filename_parts[1]}"

        with open(dated_filepath, "w") as f:
            f.write(f"Date: {date}\n")
            f.write(self.get_log())
        return dated_filepath
