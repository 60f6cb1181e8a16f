"""DOM helpers: parsing, preparation, text measures, meta lookup and cleaning passes."""
