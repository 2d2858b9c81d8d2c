from assertkit.predicates.arrays import ArrayContains, ArrayHasKey, Count
from assertkit.predicates.base import UNSET, Assertable, Predicate, PredicateOptions
from assertkit.predicates.compare import Equals, GreaterThan, InRange, LessThan, NotEquals
from assertkit.predicates.logic import AndConjunction, Conjunction, NotAssertion, OrConjunction
from assertkit.predicates.strings import Regex, StringContains, StringEndsWith, StringStartsWith
from assertkit.predicates.typechecks import (
    IsArray,
    IsEmpty,
    IsFloat,
    IsInstance,
    IsInt,
    IsNotEmpty,
    IsNotNull,
    IsNull,
    IsNumeric,
    IsString,
)

BUILTIN_PREDICATES: dict[str, type[Predicate]] = {
    "equals": Equals,
    "notEquals": NotEquals,
    "greaterThan": GreaterThan,
    "lessThan": LessThan,
    "inRange": InRange,
    "stringContains": StringContains,
    "stringStartsWith": StringStartsWith,
    "stringEndsWith": StringEndsWith,
    "regex": Regex,
    "arrayContains": ArrayContains,
    "arrayHasKey": ArrayHasKey,
    "count": Count,
    "isNull": IsNull,
    "isNotNull": IsNotNull,
    "isEmpty": IsEmpty,
    "isNotEmpty": IsNotEmpty,
    "isNumeric": IsNumeric,
    "isInt": IsInt,
    "isFloat": IsFloat,
    "isString": IsString,
    "isArray": IsArray,
    "isInstance": IsInstance,
}

__all__ = [
    "AndConjunction",
    "ArrayContains",
    "ArrayHasKey",
    "Assertable",
    "BUILTIN_PREDICATES",
    "Conjunction",
    "Count",
    "Equals",
    "GreaterThan",
    "InRange",
    "IsArray",
    "IsEmpty",
    "IsFloat",
    "IsInstance",
    "IsInt",
    "IsNotEmpty",
    "IsNotNull",
    "IsNull",
    "IsNumeric",
    "IsString",
    "LessThan",
    "NotAssertion",
    "NotEquals",
    "OrConjunction",
    "Predicate",
    "PredicateOptions",
    "Regex",
    "StringContains",
    "StringEndsWith",
    "StringStartsWith",
    "UNSET",
]
