from tcneo4j.BUILDERS.env_derivation import (
    auth_env,
    derive_env_vars,
    password_length_env,
    plugins_env,
)
from tcneo4j.MODELS.plugin import APOC, BLOOM, GRAPH_DATA_SCIENCE, Neo4jLabsPlugin

MIN_LENGTH_KEY = "NEO4J_dbms_security_auth__minimum__password__length"


def test_auth_env():
    assert auth_env("neo4j", "neo") == {"NEO4J_AUTH": "neo4j/neo"}

def test_auth_env_empty_strings():
    assert auth_env("", "") == {"NEO4J_AUTH": "/"}

def test_plugins_env_empty():
    assert plugins_env([]) == {}

def test_plugins_env_sorted_and_unique():
    env = plugins_env([GRAPH_DATA_SCIENCE, BLOOM, APOC, BLOOM])
    assert env == {"NEO4JLABS_PLUGINS": '["apoc","bloom","graph-data-science"]'}

def test_plugins_env_custom_collapses_by_name():
    env = plugins_env([Neo4jLabsPlugin.custom("x"), Neo4jLabsPlugin.custom("x"), Neo4jLabsPlugin.custom("apoc"), APOC])
    assert env == {"NEO4JLABS_PLUGINS": '["apoc","x"]'}

def test_password_length_boundary():
    assert password_length_env("1234567") == {MIN_LENGTH_KEY: "7"}
    assert password_length_env("12345678") == {}

def test_password_length_empty():
    assert password_length_env("") == {MIN_LENGTH_KEY: "0"}

def test_derive_env_vars_combines_all():
    env = derive_env_vars("neo4j", "neo", [APOC])
    assert env == {
        "NEO4J_AUTH": "neo4j/neo",
        "NEO4JLABS_PLUGINS": '["apoc"]',
        MIN_LENGTH_KEY: "3",
    }
