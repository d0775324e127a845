"""Quick manual check of the Harvard client: python debug_harvard_api.py"""

from config import get_config
from harvard_api import HarvardClient

cfg = get_config()
client = HarvardClient(cfg.api_key, base_url=cfg.api_base_url, timeout=cfg.request_timeout)

results = client.fetch_by_term_and_value("culture", "Greek")
print("Page:", results.info.page, "/", results.info.pages, "total:", results.info.totalrecords)
print("Next:", results.info.next)
for rec in results.records[:5]:
    print("-", rec.get("title"), "|", rec.get("dated"))
