# Selector operators and sort directions accepted by the ``_find`` endpoint.

GREATER_THAN = "$gt"
GREATER_THAN_OR_EQUAL = "$gte"
LESS_THAN = "$lt"
LESS_THAN_OR_EQUAL = "$lte"
EQUAL = "$eq"
NOT_EQUAL = "$ne"

ASC = "asc"
DESC = "desc"
