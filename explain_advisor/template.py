import re

_PLACEHOLDER = re.compile(r"\$\{(.*?)\}")


class KvTemplate:
    """A string with ``${name}`` placeholders.

    Names missing from the mapping render as an empty string.
    """

    def __init__(self, template: str) -> None:
        self.template = template

    def render(self, values: dict[str, str]) -> str:
        return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), ""), self.template)


def render(template: str, values: dict[str, str]) -> str:
    return KvTemplate(template).render(values)
