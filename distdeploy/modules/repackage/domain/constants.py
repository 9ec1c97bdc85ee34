"""Constants shared across the repackage domain."""

JAR_SUFFIX = ".jar"
SOURCES_CLASSIFIER = "sources"
SOURCES_SUFFIX = f"-{SOURCES_CLASSIFIER}{JAR_SUFFIX}"

LIB_DIR = "lib"
SRC_DIR = "src"
