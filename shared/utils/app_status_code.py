class AppStatusCode:
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"

    OPERATION_FAILED = "200"
    INVALID_INPUT = "201"
    RESOURCE_NOT_FOUND = "202"
    DUPLICATE_RESOURCE = "203"
    TEMPLATE_UNKNOWN_TAG = "204"

    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"
    AUTHENTICATION_FORBIDDEN = "302"
