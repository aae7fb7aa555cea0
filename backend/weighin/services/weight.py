import math
import re

from flask import current_app

from weighin.errors import ExtractionError, ValidationError, WeightParseError


# Accepted numeric forms, tried left to right through the reply; at a given
# position the power form wins over the plain one so "2.5 x 10^4" is not
# read as "2.5".
#   power    := mantissa WS* x WS* 10^ [+-]? digits
#   plain    := mantissa ( e [+-]? digits )?
#   mantissa := digits ( . digits )?
WEIGHT_PATTERN = re.compile(r'''
    (?P<power>
        (?P<mantissa>\d+(?:\.\d+)?)
        \s*x\s*10\^
        (?P<exponent>[+-]?\d+)
    )
    |
    (?P<plain>\d+(?:\.\d+)?(?:e[+-]?\d+)?)
''', re.IGNORECASE | re.VERBOSE)

PROMPT_TEMPLATE = (
    'What is the average weight of a {object} in kilograms? '
    'Respond with only an integer, with no words. '
    'If the weight is expressed as a power, please return it in the format 1Ex, '
    'where x is the exponent.'
)


def build_prompt(object_name: str) -> str:
    return PROMPT_TEMPLATE.format(object=object_name)


def extract_weight(text: str) -> float:
    """Pull the first number out of a free-text completion reply.

    ``"75"`` -> 75.0, ``"1E3"`` -> 1000.0, ``"2.5 x 10^4"`` -> 25000.0.
    Raises ExtractionError when nothing numeric is present and
    WeightParseError when the match does not give a finite float.
    """
    match = WEIGHT_PATTERN.search(text or '')
    if not match:
        raise ExtractionError('Could not extract a valid weight.')

    if match.group('power'):
        literal = f"{match.group('mantissa')}e{match.group('exponent')}"
    else:
        literal = match.group('plain')

    weight = float(literal)
    if not math.isfinite(weight):
        raise WeightParseError('Could not find a valid weight in the response.')
    return weight


class WeightService:
    """Asks the completion provider for an object's average weight in kg."""

    def __init__(self, completion_client):
        self._client = completion_client

    def infer_weight_kilograms(self, object_name) -> float:
        if not isinstance(object_name, str) or not object_name.strip():
            raise ValidationError('Object name is required.')

        reply = self._client.complete(build_prompt(object_name))
        current_app.logger.info(f'[weight] object={object_name!r} reply={reply!r}')
        return extract_weight(reply)
