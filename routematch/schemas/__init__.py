"""
Pydantic schemas for route definitions and compiled routes.

- service_profile: user-authored input (struct of optional selectors)
- destination: compiled output (tagged unions) for the data-plane proxy
"""

# Re-export schemas for convenient imports.
from .destination import DestinationRequestMatch as DestinationRequestMatch
from .destination import DestinationResponseClass as DestinationResponseClass
from .destination import DestinationResponseMatch as DestinationResponseMatch
from .destination import DestinationRoute as DestinationRoute
from .service_profile import Range as Range
from .service_profile import RequestMatch as RequestMatch
from .service_profile import ResponseClassSpec as ResponseClassSpec
from .service_profile import ResponseMatch as ResponseMatch
from .service_profile import RouteSpec as RouteSpec
