import os
from dataclasses import dataclass
from dynaconf import Dynaconf
from demos.app.constants import DEFAULTS

from kgops.config.settings import (
    ClientConfig,
    PublishConfig,
    RecordConfig,
    DemoDataConfig,
    KgopsConfig,
)

settings = Dynaconf(
    envvar_prefix="KGOPS",
    load_dotenv=True,
    settings_files=[],
)
for _key, _value in DEFAULTS.items():
    settings.setdefault(_key, _value)


def _unprefixed(name):
    # .env files written for the wallet tooling use bare names
    return settings.get(name) or os.environ.get(name) or None


def _parse_csv(value):
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return tuple(value)
    if isinstance(value, str):
        return tuple(v.strip() for v in value.split(",") if v.strip())
    return None


@dataclass(frozen=True)
class AppConfig:
    # ---------------- App ----------------
    log_level: str = settings.get("LOG_LEVEL", "INFO")

    # ---------------- Kgops Policy ----------------
    kgops: KgopsConfig = KgopsConfig(
        client=ClientConfig(
            api_url=settings.get("API_URL"),
            timeout_s=float(settings.get("HTTP_TIMEOUT_S", 30.0)),
        ),
        publish=PublishConfig(
            space_id=_unprefixed("DEMO_SPACE_ID"),
            network=settings.get("NETWORK", "TESTNET"),
            rpc_url=settings.get("RPC_URL"),
            wallet_key=_unprefixed("PK_SW"),
            dry_run=bool(settings.get("DRY_RUN", True)),
        ),
        record=RecordConfig(
            record_dir=settings.get("RECORD_DIR"),
            publish_record_file=settings.get("PUBLISH_RECORD_FILE"),
            delete_record_file=settings.get("DELETE_RECORD_FILE"),
        ),
        data=DemoDataConfig(
            data_dir=settings.get("DATA_DIR"),
            showcase_project=settings.get("SHOWCASE_PROJECT"),
            key_people=_parse_csv(settings.get("KEY_PEOPLE")) or (),
        ),
    )
