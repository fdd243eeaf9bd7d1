"""Wire models, state-change validation and operation builders."""
