from pydantic import BaseModel, Field

from ogmeta.components.bots import DEFAULT_BOT_SIGNATURES


class BotRules(BaseModel):
    signatures: list[str] = Field(default_factory=lambda: list(DEFAULT_BOT_SIGNATURES))
    force_param: str = "force"


class RoutingRules(BaseModel):
    article_prefix: str = "/article/"


class ImageRules(BaseModel):
    default_path: str = "/og-default.png"
    mime_type: str = "image/jpeg"
    width: int = 1200
    height: int = 630


class BrandingRules(BaseModel):
    locale: str = "bn_BD"
    lang: str = "bn"
    twitter_site: str | None = "@banglatimes"
    default_logo_path: str = "/logo.png"
    default_favicon_path: str = "/favicon.ico"


class CachingRules(BaseModel):
    cache_control: str = "public, max-age=3600, s-maxage=3600"
    settings_ttl_seconds: int = 300


class HttpRules(BaseModel):
    timeout_seconds: float = 10.0


class Rules(BaseModel):
    bots: BotRules = Field(default_factory=BotRules)
    routing: RoutingRules = Field(default_factory=RoutingRules)
    images: ImageRules = Field(default_factory=ImageRules)
    branding: BrandingRules = Field(default_factory=BrandingRules)
    caching: CachingRules = Field(default_factory=CachingRules)
    http: HttpRules = Field(default_factory=HttpRules)
