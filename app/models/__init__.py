# Importing the package registers every table on Base.metadata
from app.models.user import User, Role  # noqa: F401
from app.models.publication import Publication, PublicationType  # noqa: F401
from app.models.thesis import Thesis, MasterSI, ThesisType, MasterSIType  # noqa: F401
from app.models.actu import Actu, ActuCategory  # noqa: F401
from app.models.homepage import Hero, CarouselItem, PresentationContent  # noqa: F401
