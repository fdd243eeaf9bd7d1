"""iondid: Sidetree/ION DID operation request builders."""

__version__ = "0.1.0"
