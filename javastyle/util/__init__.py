from javastyle.util.comparators import (
    Comparator,
    Equals,
    comparing,
    comparing_floats,
    comparing_ints,
    comparing_strings,
    natural_order,
    reverse_order,
)
