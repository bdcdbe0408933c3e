from .auth import requester_from_event as requester_from_event
from .http_response import api_response as api_response
from .http_response import error_response as error_response
from .http_response import internal_error_response as internal_error_response
from .http_response import status_code_for as status_code_for
from .http_response import validation_error_response as validation_error_response
from .logger import log_domain_events as log_domain_events
from .validators import to_decimal as to_decimal
