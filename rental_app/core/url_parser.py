import logging
from typing import List

logger = logging.getLogger(__name__)


class URLParser:
    """Turns a comma separated env value into a list of CORS origins."""

    def parse_url_list(self, raw_value: str, name: str) -> List[str]:
        origins: List[str] = []
        for item in raw_value.split(","):
            item = item.strip().rstrip("/")
            if item == "*":
                return ["*"]
            if not item.startswith(("http://", "https://")):
                if item:
                    logger.warning("Ignoring %s entry %r: not an http(s) origin", name, item)
                continue
            if item not in origins:
                origins.append(item)

        if not origins:
            logger.warning("No valid origins found in %s", name)
        return origins


parser = URLParser()
