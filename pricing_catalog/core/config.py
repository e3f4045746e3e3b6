from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(default="sqlite:///./pricing_catalog.db", alias="DATABASE_URL")
    database_timeout_seconds: float = Field(default=5.0, alias="DATABASE_TIMEOUT_SECONDS")

    # JWT Configuration
    secret_key: str = Field(alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Catalog storage
    catalog_slot: str = Field(default="pricingData", alias="CATALOG_SLOT")
    catalog_file_path: str | None = Field(default=None, alias="CATALOG_FILE_PATH")

    # Roles allowed to modify the catalog (comma-separated)
    catalog_editor_roles: str = Field(
        default="super_admin,partnership,business", alias="CATALOG_EDITOR_ROLES"
    )

    # Report updates/deletes against missing keys instead of ignoring them
    strict_not_found: bool = Field(default=False, alias="STRICT_NOT_FOUND")

    @field_validator("catalog_file_path", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @property
    def editor_roles(self) -> tuple[str, ...]:
        return tuple(
            role.strip() for role in self.catalog_editor_roles.split(",") if role.strip()
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
