from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Base URL of the Jira instance, e.g. "https://jira.example.com"
    jira_url: str = ""
    # File with <user> on line 1 and <pass> (or API token) on line 2
    jira_auth_file: str = ""
    max_issues: int = 50
    log_level: str = "info"
    # Minimum delay between label updates sent to Jira
    rate_limit_ms: int = 200
    request_timeout: float = 30.0
    user_agent: str = "label-norm/0.1"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
