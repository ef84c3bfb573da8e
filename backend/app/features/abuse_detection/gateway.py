from typing import List, Union
import structlog

from app.core.henrik_api import HenrikAPIClient, MatchRecord, Region

logger = structlog.get_logger(__name__)


class MatchHistoryGateway:
    """Gateway for match-history calls to the HenrikDev API"""

    def __init__(self, henrik_client: HenrikAPIClient):
        self.henrik_client = henrik_client

    async def fetch_match_history(
        self, puuid: str, region: Union[Region, str]
    ) -> List[MatchRecord]:
        """Fetch and decode a player's recent matches.

        Provider errors propagate; the service decides how to report them.
        """
        matches = await self.henrik_client.get_match_history(puuid, region)

        malformed = sum(1 for match in matches if match.malformed)
        logger.info(
            "match_history_fetched",
            puuid=puuid,
            region=region.value if isinstance(region, Region) else region,
            matches=len(matches),
            malformed=malformed,
        )
        return matches
