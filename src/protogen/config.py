"""Global configuration: type names, rendering constants, defaults."""

# Type names that resolve to a numeric text-entry control.
NUMERIC_TYPE_NAMES = frozenset({
    "Int8", "Int16", "Int32", "Int64", "Int",
    "UInt8", "UInt16", "UInt32", "UInt64", "UInt",
    "Float16", "Float32", "Float64", "Float80", "Float", "Double",
})

BOOLEAN_TYPE_NAME = "Bool"
TEXT_TYPE_NAME = "String"
DATE_TYPE_NAME = "Date"

# Rendered in place of a secure text value on the read-only surface
SECURE_MASK = "********"

# Default value of a settings property whose member has no initializer
DEFAULT_INITIALIZER = ".init()"

# Display formats used by the read-only surface
DATE_DISPLAY_FORMAT = ".dateTime"
NUMBER_DISPLAY_FORMAT = ".number"

# Suffix appended to a control key to form its label key
LABEL_KEY_SUFFIX = ".label"

# Indentation unit of generated source text
INDENT = "    "

# Name of the declaration attribute that requests generation
PROTOTYPE_ATTRIBUTE = "Prototype"

# Member attributes understood by the declaration parser
SECURE_ATTRIBUTE = "Secure"
SECTION_ATTRIBUTE = "Section"
HIDDEN_ATTRIBUTE = "Hidden"

# Extension of files written by the command line
OUTPUT_SUFFIX = ".swift"
