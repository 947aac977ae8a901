"""Exceptions raised when the response builder contract is broken."""


class ResponseContractError(Exception):
    """A handler built or returned a response that must never reach a client.

    These are programming errors in the calling handler, not runtime
    conditions. They abort the current request; the router turns them into
    a generic 500.
    """


class UnsupportedPayloadTypeError(ResponseContractError):
    """The serializer does not know how to encode the payload kind."""


ERR_NIL_ERROR = "error cannot be None"
ERR_EMPTY_MESSAGE = "message cannot be empty"
ERR_NIL_JSON_PAYLOAD = "json payload cannot be None in favour of using no_content() instead"
ERR_INCOMPLETE_RESPONSE = "response is incomplete, select a payload before writing it"
