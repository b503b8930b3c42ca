"""ORM helpers: value conversion and column quoting."""