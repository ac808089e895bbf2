"""
Data structures coming from/to the Kubernetes API and the watch runtime.

All the structures here are purely data-holding or computational.
No external calls or any i/o activities are done here.
"""
