def split_sql_statements(sql: str) -> list[str]:
    """Split a SQL script on every ``;`` into trimmed, non-empty statements.

    Semicolons inside string literals or comments are not special, so a
    quoted ``;`` splits the statement too.
    """
    statements = []
    for segment in sql.split(";"):
        statement = segment.strip()
        if statement:
            statements.append(statement)
    return statements
