from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="CAREBILL_", extra="ignore")

    timezone: str = "UTC"
    tax_rate: float = 0.0

    company_name: str = "Daytocare Health Services"
    email_from: str = "finance@dtchealthservices.com"
    email_from_name: str = "Daytocare Health Services"

    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_timeout: int = 30  # seconds

    clients_file: str = ""
    output_dir: str = "./invoices"

    invoice_counter_file: str = ""  # defaults to <output_dir>/invoice_counters.json

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
