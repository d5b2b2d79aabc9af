from configparser import ConfigParser
from typing import Dict, List, Optional

from rangetree import ops
from rangetree.ops import make_operator, Operator

TREE_SECTION = "tree"
OPERATOR_PREFIX = "operator."


class Config:
    def __init__(self):
        self.size: Optional[int] = None
        self.operator = "max"
        self.lazy = True
        # Operators defined by this file only; the built-in catalog is untouched
        self.operators: Dict[str, Operator] = {}

    def get_operator(self, name: str) -> Operator:
        operator = self.operators.get(name)
        if operator is not None:
            return operator
        return ops.get_operator(name)

    def operator_names(self) -> List[str]:
        return sorted(set(ops.operator_names()) | set(self.operators))


def load_config(path: Optional[str] = None) -> Config:
    """Reads an INI file with tree defaults and additional operators.

    Without ``path`` the built-in defaults are returned. Operators are kept
    on the returned ``Config`` and may not redefine a built-in name.
    """
    result = Config()
    if path is None:
        return result
    config = ConfigParser()
    with open(path) as fp:
        config.read_file(fp)
    for section_name in config.sections():
        section = config[section_name]
        if section_name == TREE_SECTION:
            if "size" in section:
                result.size = section.getint("size")
            result.operator = section.get("operator", result.operator)
            result.lazy = section.getboolean("lazy", result.lazy)
        elif section_name.startswith(OPERATOR_PREFIX):
            name = section_name[len(OPERATOR_PREFIX) :]
            if name in ops.operator_names():
                raise RuntimeError("Cannot redefine built-in operator: {}".format(name))
            kind = section["kind"]
            kwargs = {}
            if "modulus" in section:
                if kind != "modsum":
                    raise RuntimeError(
                        "modulus is only supported by modsum: {}".format(section_name)
                    )
                kwargs["modulus"] = section.getint("modulus")
            result.operators[name] = make_operator(name, kind, **kwargs)
        else:
            raise RuntimeError("Unsupported section: {}".format(section_name))
    return result
