VERSION = "0.1.0"

# This will be templated during the build process
GIT_COMMIT = "__GIT_COMMIT__"
