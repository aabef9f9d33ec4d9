"""
AWS SES API error codes grouped by how they are reported.
Common API error codes:
    https://docs.aws.amazon.com/ses/latest/APIReference/CommonErrors.html
"""

AWS_AUTH_ERROR_CODES = {
    "InvalidClientTokenId",
    "AccessDeniedException",
    "MissingAuthenticationToken",
    "IncompleteSignature",
    "NotAuthorized",
    "AccessDenied",
    "SignatureDoesNotMatch",
}

AWS_VALUE_ERROR_CODES = {
    "InvalidParameterCombination",
    "InvalidParameterValue",
    "InvalidQueryParameter",
    "MalformedQueryString",
    "MissingParameter",
    "ValidationError",
}

AWS_LIMIT_ERROR_CODES = {
    "ThrottlingException",
    "TooManyRequestsException",
    "LimitExceededException",
}

AWS_SERVICE_ERROR_CODES = {
    "ServiceUnavailable",
    "InternalFailure",
    "InternalServerError",
}
