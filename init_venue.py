import json
import os

from dotenv import load_dotenv

# ======================================================
# ENV
# ======================================================

load_dotenv()

ORGANIZATION_NAME = os.getenv("ORGANIZATION_NAME")
ACTIVITY_NAME = os.getenv("ACTIVITY_NAME", "Main hall")
ACTIVITY_DURATION = int(os.getenv("ACTIVITY_DURATION", "60"))
ACTIVITY_MAX_PARTY = int(os.getenv("ACTIVITY_MAX_PARTY", "8"))

if not ORGANIZATION_NAME:
    raise RuntimeError("ORGANIZATION_NAME is not set")

# Imported after load_dotenv so VENUEBOOK_* values from .env apply
from venuebook.database import SessionLocal, engine  # noqa: E402
from venuebook.models import Activities, Base, Organizations  # noqa: E402

DEFAULT_SCHEDULE = {
    "operating_days": ["mon", "tue", "wed", "thu", "fri", "sat", "sun"],
    "open_time": "10:00",
    "close_time": "22:00",
}


# ======================================================
# MAIN LOGIC
# ======================================================

def main():
    Base.metadata.create_all(engine)

    db = SessionLocal()
    try:
        # --- ensure organization ---
        org = (
            db.query(Organizations)
            .filter(Organizations.name == ORGANIZATION_NAME)
            .first()
        )
        if org is None:
            org = Organizations(name=ORGANIZATION_NAME)
            db.add(org)
            db.flush()
            print(f"[BOOTSTRAP] Organization created (id={org.id})")

        # --- ensure activity ---
        activity = (
            db.query(Activities)
            .filter(Activities.organization_id == org.id, Activities.name == ACTIVITY_NAME)
            .first()
        )
        if activity is None:
            activity = Activities(
                organization_id=org.id,
                name=ACTIVITY_NAME,
                duration_minutes=ACTIVITY_DURATION,
                min_party_size=1,
                max_party_size=ACTIVITY_MAX_PARTY,
                schedule=json.dumps(DEFAULT_SCHEDULE),
            )
            db.add(activity)
            db.flush()
            print(f"[BOOTSTRAP] Activity created (id={activity.id})")
        else:
            print("[BOOTSTRAP] Activity already exists, nothing to do")

        db.commit()
    finally:
        db.close()


# ======================================================
# ENTRYPOINT
# ======================================================

if __name__ == "__main__":
    main()
