def escape_query_string(value):
    """
    Escapes a value for use inside a single-quoted string in a Drive `q` filter.

    :param value: Raw value, e.g. a folder name typed by a user.
    :type value: str
    :return: `value` with backslashes and single quotes escaped.
    :rtype: str
    """
    return value.replace("\\", "\\\\").replace("'", "\\'")


class DriveQuery(object):
    def __init__(self):
        """
        Builds a Drive `q` filter out of clauses joined with "and".

        Every value is escaped, so names containing quotes can't change the shape of the query.
        """
        self._clauses = []

    def name_equals(self, name):
        self._clauses.append(f"name = '{escape_query_string(name)}'")
        return self

    def mime_type_equals(self, mime_type):
        self._clauses.append(f"mimeType = '{escape_query_string(mime_type)}'")
        return self

    def in_parents(self, parent_id):
        self._clauses.append(f"'{escape_query_string(parent_id)}' in parents")
        return self

    def not_trashed(self):
        self._clauses.append("trashed = false")
        return self

    def build(self):
        return " and ".join(self._clauses)
