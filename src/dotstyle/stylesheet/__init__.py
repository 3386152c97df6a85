from dotstyle.stylesheet.parser import parse_stylesheet
from dotstyle.stylesheet.model import Stylesheet, StyleRule, Selector

__all__ = ["parse_stylesheet", "Stylesheet", "StyleRule", "Selector"]
