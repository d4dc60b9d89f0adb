"""Dashboard queries and chart builders."""
