class WorkloadException(Exception):
    pass


class WorkloadIOException(WorkloadException):
    def __init__(self, filename, error):
        self.filename = filename
        self.error = error
        reason = getattr(error, 'strerror', None) or str(error)
        Exception.__init__(self, 'Cannot read workload file {:s}: {:s}'.format(str(filename), reason))


class ParseException(WorkloadException):
    """
    A malformed workload line. Keeps the line number (1-based) and the raw line.
    """
    def __init__(self, lineno, line, reason):
        self.lineno = lineno
        self.line = line
        self.reason = reason
        Exception.__init__(self, 'line {:d}: {:s}: {!r}'.format(lineno, reason, line))


class MissingSeparatorException(ParseException):
    pass


class NonNumericFieldException(ParseException):
    def __init__(self, lineno, line, field):
        self.field = field
        ParseException.__init__(self, lineno, line, 'non numeric field {!r}'.format(field))


class FieldRangeException(ParseException):
    def __init__(self, lineno, line, name, value, minimum, maximum):
        self.name = name
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        ParseException.__init__(self, lineno, line, '{:s} value {:d} out of range [{:d}, {:d}]'.format(
            name, value, minimum, maximum))
