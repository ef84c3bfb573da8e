"""HenrikDev API constants and enum definitions."""

from enum import Enum


class Region(str, Enum):
    """Valorant shards served by the HenrikDev match-history endpoints."""

    AP = "ap"
    BR = "br"
    EU = "eu"
    KR = "kr"
    LATAM = "latam"
    NA = "na"


# Maximum retries for 429/5xx responses and transport errors
MAX_RETRIES = 3

USER_AGENT = "ValorantAbuseDetector/1.0"
