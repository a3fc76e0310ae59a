"""
Configuration constants to replace magic values throughout tmplexpr
"""

# Identifier rewriting
CONTEXT_PREFIX = "_ctx."  # Routes a free identifier read through the render context

# Names that are never routed through the render context, independent of scope.
# Override per TransformContext with `globals_`.
DEFAULT_GLOBALS = frozenset(
    (
        "Infinity,undefined,NaN,isFinite,isNaN,"
        "parseFloat,parseInt,decodeURI,decodeURIComponent,encodeURI,encodeURIComponent,"
        "Math,Number,Date,Array,Object,Boolean,String,RegExp,Map,Set,JSON,Intl,"
        "require,"  # bundler shim
        "arguments"  # parsed as an identifier but is a special keyword
    ).split(",")
)

# Expression wrapping: the raw text is parsed as "(" + text + ")" so that object
# literals, sequences and keyword-led text parse as a single expression
EXPRESSION_OPEN = "("
EXPRESSION_CLOSE = ")"

# Parser configuration constants
GRAMMAR_FILE_NAME = "grammar.lark"

# Display and formatting constants
ERROR_POINTER_CHAR = "^"
