USERNAME = "user"
PASSWORD = "pass"
DATABASE = "testdb"
