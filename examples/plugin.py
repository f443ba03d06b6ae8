"""
Example plugin wiring pluginlog into a Serverless-style host.

Run directly to see the output against a minimal fake host.
"""

from types import SimpleNamespace

from pluginlog import create_logger


class ServerlessError(Exception):
    pass


class TestPlugin:
    def __init__(self, serverless, options=None):
        self.serverless = serverless
        self.options = options or {}
        self.logger = create_logger(serverless, "test")
        self.hooks = {"before:package:finalize": self.test}

    def test(self):
        self.logger.debug("This is a debug message.")
        self.logger.info("This is an info message.")
        self.logger.warn("This is a warning message.")
        self.logger.warn("This is a warning message with exception.", RuntimeError("warning"))
        self.logger.error("This is an error message.")
        self.logger.error("This is an error message with exception.", RuntimeError("error"))
        self.logger.throw(RuntimeError("This is a thrown error."))


if __name__ == "__main__":
    host = SimpleNamespace(cli=SimpleNamespace(log=print), classes=SimpleNamespace(Error=ServerlessError))
    plugin = TestPlugin(host)
    try:
        plugin.hooks["before:package:finalize"]()
    except ServerlessError as exc:
        print(f"aborted: {exc}")
