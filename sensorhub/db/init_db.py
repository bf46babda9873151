from sensorhub.db.base import Base
from sensorhub.db.session import engine
import sensorhub.models  # noqa: F401  (registra os modelos em Base.metadata)

def init_db():
    Base.metadata.create_all(bind=engine)
