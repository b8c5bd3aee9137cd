# coding: utf-8


class Object(object):
    """Registry object as an ordered list of key-value-tuples. Keys are
    case-insensitive and stored in lower case; a key may occur more than
    once."""

    def __init__(self, data=None):
        self._data = []
        if data is not None:
            self.extend(data)

    @property
    def data(self):
        """List of key-value-tuples."""
        return self._data

    @property
    def object_class(self):
        """Object class of this object, i.e. the key of the first field."""
        return self.data[0][0]

    @property
    def object_key(self):
        """Object key of this object, i.e. the value of the first field."""
        return self.data[0][1]

    def extend(self, ex):
        """Extend object with RPSL text, a mapping or a list of key-value
        pairs."""
        if isinstance(ex, str):
            ex = parse_object(ex.splitlines())
        elif hasattr(ex, "items"):
            ex = _mapping_items(ex)
        for key, value in ex:
            self.add(key, value)

    def add(self, key, value):
        self._data.append((str(key).strip().lower(), str(value)))

    def get(self, key):
        """Return a list of values for a given key."""
        key = key.lower()
        return [v for k, v in self._data if k == key]

    def getfirst(self, key, default=None):
        try:
            return self.get(key)[0]
        except IndexError:
            return default

    def __contains__(self, key):
        return key.lower() in set(self.keys())

    def __bool__(self):
        return bool(self.data)

    def items(self):
        return iter(self.data)

    def keys(self):
        return (key for key, _ in self.items())

    def __repr__(self):
        if not self:
            return "<{}.{} (empty)>".format(type(self).__module__,
                                            type(self).__name__)
        return "<{}.{} {}: {}>".format(type(self).__module__,
                                       type(self).__name__,
                                       self.object_class, self.object_key)


def strip_comment(line):
    """Remove RPSL comments, i.e. everything after '%' or '#'."""
    return line.split("%")[0].split("#")[0]


def is_comment_block(lines):
    """True if the lines carry nothing but comments and whitespace."""
    return not any(strip_comment(line).strip() for line in lines)


def _mapping_items(mapping):
    for key, values in mapping.items():
        if not isinstance(values, (list, tuple, set, frozenset)):
            values = [values]
        for value in values:
            yield key, value


def split_objects(lines):
    """Split a stream of lines at empty lines, yielding the lines of each
    object."""
    obj = []
    for line in lines:
        if not line.strip():
            if obj:
                yield obj
            obj = []
        else:
            obj.append(line)
    if obj:
        yield obj


def parse_object(lines):
    r'''Simple RPSL object parser which expects an iterable of lines and
    returns a list of key-value-tuples.

    Each line consists of key and value, separated by a colon ':'. Keys are
    folded to lower case, keys and values are stripped of surrounding
    whitespace. Everything after '%' or '#' is treated as comment. A line
    starting with whitespace or '+' continues the value of the previous
    line; the parts are joined with '\n'.

    Raises ValueError for lines without a colon, or for continuation lines
    which have nothing to continue.
    '''
    result = []

    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            continue

        line = strip_comment(line)
        if not line.strip():
            continue

        if line[0] in {" ", "\t", "+"}:
            if not result:
                raise ValueError(
                    "Syntax error: Continuation line without preceding field")
            key, value = result.pop()
            result.append((key, "\n".join([value, line[1:].strip()])))
            continue

        try:
            key, value = line.split(":", 1)
        except ValueError:
            raise ValueError(
                "Syntax error: Missing value in line {!r}".format(line))

        key = key.strip().lower()
        if not key:
            raise ValueError("Syntax error: Empty key")
        result.append((key, value.strip()))

    return result
