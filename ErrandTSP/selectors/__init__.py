from ErrandTSP.selectors.base import BaseSelector
from ErrandTSP.selectors.selector_rule_based import RuleBasedSelector


def get_selector(name: str = "rule_based", **kwargs) -> BaseSelector:
    if name == "rule_based":
        return RuleBasedSelector(**kwargs)
    raise ValueError(f"Unknown selector: {name}")


__all__ = ["BaseSelector", "RuleBasedSelector", "get_selector"]
