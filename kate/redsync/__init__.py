"""Redis-based distributed mutual exclusion locks."""