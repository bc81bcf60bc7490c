"""Tests for report name derivation."""
import hashlib

from lighthouse_batch.naming import SiteNamer, derive_name, normalize_url, site_name


class TestSiteName:
    """Test suite for site_name."""

    def test_replaces_unsafe_characters(self):
        """Scheme is stripped and separators become underscores."""
        name = site_name("https://www.example.com/path?x=1#frag")
        assert name == "www_example_com_path_x=1_frag"

    def test_replaces_every_reserved_character(self):
        """Each of / ? # : * $ @ ! . maps to an underscore."""
        assert site_name("http://a/b?c#d:e*f$g@h!i.j") == "a_b_c_d_e_f_g_h_i_j"

    def test_long_names_are_truncated_and_hashed(self):
        """Names over 100 characters keep a 7 character hash of the full name."""
        url = "https://example.com/" + "a" * 150
        full = "example_com_" + "a" * 150
        digest = hashlib.sha1(full.encode("utf-8")).hexdigest()[:7]

        name = site_name(url)

        assert name == full[:100] + "_" + digest
        assert len(name) == 108

    def test_truncation_strips_trailing_underscores(self):
        """Underscores left at the cut point are removed before the hash."""
        url = "https://" + "a" * 98 + "/////" + "b" * 10
        full = "a" * 98 + "_____" + "b" * 10
        digest = hashlib.sha1(full.encode("utf-8")).hexdigest()[:7]

        assert site_name(url) == "a" * 98 + "_" + digest

    def test_short_names_are_untouched(self):
        """Names at the limit are not hashed."""
        url = "https://" + "a" * 100
        assert site_name(url) == "a" * 100


class TestDeriveName:
    """Test suite for derive_name."""

    def test_duplicates_get_numeric_suffixes(self):
        """Repeated URLs yield name, name_1, name_2."""
        seen = set()
        names = [derive_name("https://example.com", seen) for _ in range(3)]

        assert names == ["example_com", "example_com_1", "example_com_2"]
        assert seen == set(names)

    def test_skips_suffixes_already_taken(self):
        """A suffix already present in the set is not reused."""
        seen = {"example_com", "example_com_1"}
        assert derive_name("https://example.com", seen) == "example_com_2"

    def test_comparison_is_case_sensitive(self):
        """Names differing only in case do not collide."""
        seen = set()
        first = derive_name("https://Example.com", seen)
        second = derive_name("https://example.com", seen)

        assert first == "Example_com"
        assert second == "example_com"


class TestNormalizeUrl:
    """Test suite for normalize_url."""

    def test_bare_host_gets_https(self):
        assert normalize_url("example.com") == "https://example.com"

    def test_protocol_relative_url(self):
        assert normalize_url("//cdn.example.net") == "https://cdn.example.net"

    def test_explicit_scheme_is_kept(self):
        assert normalize_url("http://example.com") == "http://example.com"
        assert normalize_url("  https://example.com/a  ") == "https://example.com/a"


class TestSiteNamer:
    """Test suite for SiteNamer."""

    def test_build_sets_report_file_names(self):
        """Optional HTML and CSV names follow the JSON name."""
        site = SiteNamer().build("example.com", html=True, csv=True)

        assert site.url == "https://example.com"
        assert site.name == "example_com"
        assert site.file == "example_com.report.json"
        assert site.html == "example_com.report.html"
        assert site.csv == "example_com.report.csv"

    def test_build_without_extra_outputs(self):
        site = SiteNamer().build("example.com")
        assert site.html is None
        assert site.csv is None

    def test_names_unique_within_one_namer(self):
        """Two inputs for the same origin get distinct names."""
        namer = SiteNamer()
        first = namer.build("example.com")
        second = namer.build("https://example.com")

        assert first.name == "example_com"
        assert second.name == "example_com_1"
        assert second.file == "example_com_1.report.json"
