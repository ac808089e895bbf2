"""
General-purpose helpers not related to the decision core itself,
which are used to prepare and control the runtime environment.

Helpers do not depend on anything else in the package, and could be
extracted as reusable libraries.
"""
