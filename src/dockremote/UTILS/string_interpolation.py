"""
Variable interpolation for container spec files.
"""
import re
from typing import Mapping

# ${VAR}, ${VAR:-default}, ${VAR:+alt}, or an escaped $$
VARIABLE_PATTERN = re.compile(r"\$\$|\$\{([^}:]+)(?::([-+])([^}]*))?\}")


class EnvironmentInterpolator:
    """
    Substitutes ${VAR}, ${VAR:-default} and ${VAR:+alt} placeholders.
    A literal dollar sign is written as $$.
    """
    @staticmethod
    def interpolate(template: str, context: Mapping[str, str]) -> str:
        """
        Interpolates placeholders in the template from the given context.

        :param template: The text containing placeholders.
        :param context: Variable values.
        :return: The interpolated text.
        :raises KeyError: If a plain ${VAR} is not set in the context.
        """
        def replace(match):
            if match.group(0) == "$$":
                return "$"
            name, modifier, alt_value = match.groups()
            value = context.get(name)

            if modifier == "-":
                return value if value else alt_value
            if modifier == "+":
                return alt_value if value else ""
            if value is None:
                raise KeyError(name)
            return value

        return VARIABLE_PATTERN.sub(replace, template)
