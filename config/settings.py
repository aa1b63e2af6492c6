from dataclasses import dataclass, field
import os
from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str = None):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass
class Settings:

    GITLAB_TOKEN: str = _env('GITLAB_TOKEN')
    GITLAB_API_URL: str = _env('GITLAB_API_URL', 'https://gitlab.com')
    GITLAB_SERVER_NAME: str = _env('GITLAB_SERVER_NAME', 'gitlab-mcp-server')
    REQUEST_TIMEOUT: str = _env('REQUEST_TIMEOUT', '30')
    LOG_LEVEL: str = _env('LOG_LEVEL', 'INFO')

    @property
    def request_timeout(self) -> float:
        return float(self.REQUEST_TIMEOUT)

    def validate(self) -> bool:

        if not self.GITLAB_TOKEN:
            raise ValueError("GITLAB_TOKEN is not set. Please add it to your .env file")

        try:
            timeout = self.request_timeout
        except (TypeError, ValueError):
            raise ValueError(f"REQUEST_TIMEOUT must be a number, got {self.REQUEST_TIMEOUT!r}")
        if timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be greater than zero")

        return True

