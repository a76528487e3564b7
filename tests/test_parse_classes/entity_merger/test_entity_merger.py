"""test_entity_merger.py
Run tests on list-level reconciliation of experience, projects, education and skills
"""
from resume_synth.models import EducationRecord, ExperienceRecord, ProjectRecord
from resume_synth.parse_classes.entity_merger.identity_keys import identity_key
from resume_synth.parse_classes.entity_merger.entity_merger import (
    assign_record_ids,
    build_keyed_map,
    combine_skills,
    consolidate_experience_entries,
    dedupe_experience_cards,
    ensure_all_education,
    ensure_all_experience,
    ensure_all_projects,
    finalize_experience,
    fold_projects_into_experience,
    lookup_record,
    normalize_education_output,
    prune_duplicate_experience_content,
    sanitize_project_entries,
    should_drop_experience_entry,
)


# ---------------------------------------------------------------------------
# Keyed lookup
# ---------------------------------------------------------------------------
class TestKeyedLookup:
    """Unit tests for build_keyed_map() and lookup_record()."""

    ORIGINAL = ExperienceRecord(id="exp-1", role="Engineer", company="Acme", start_date="Jan 2020")

    def test_lookup_by_identity_key(self):
        """A differently worded copy of the same role is found."""
        keyed = build_keyed_map([self.ORIGINAL])
        found = lookup_record(keyed, ExperienceRecord(role="engineer", company="ACME", start_date="January 2020"))
        assert found is self.ORIGINAL

    def test_explicit_id_wins(self):
        """An id match wins even when the headings differ."""
        other = ExperienceRecord(role="Staff Engineer", company="Initech")
        keyed = build_keyed_map([other, self.ORIGINAL])
        found = lookup_record(keyed, ExperienceRecord(id="exp-1", role="Staff Engineer", company="Initech"))
        assert found is self.ORIGINAL

    def test_missing(self):
        keyed = build_keyed_map([self.ORIGINAL, None])
        assert lookup_record(keyed, ExperienceRecord(role="Analyst", company="Globex")) is None


# ---------------------------------------------------------------------------
# Ordered keyed merge
# ---------------------------------------------------------------------------
class TestEnsureAll:
    """Unit tests for ensure_all_experience / projects / education."""

    def test_no_duplicates_and_first_appearance_order(self):
        """Same-key records merge in place; the output has one record per key."""
        generated = [
            ExperienceRecord(role="Engineer", company="Acme", start_date="Jan 2020", achievements=["Built api"]),
        ]
        original = [
            ExperienceRecord(role="Analyst", company="Globex"),
            ExperienceRecord(role="Engineer", company="Acme", start_date="January 2020", achievements=["Wrote docs"]),
        ]
        merged = ensure_all_experience(generated, original)
        assert [(r.role, r.company) for r in merged] == [("Engineer", "Acme"), ("Analyst", "Globex")]
        assert merged[0].start_date == "January 2020"
        assert merged[0].achievements == ["Built api", "Wrote docs"]
        keys = [identity_key(r) for r in merged]
        assert len(keys) == len(set(keys))

    def test_explicit_id_merges_different_headings(self):
        """Records sharing an id merge even if their headings changed."""
        merged = ensure_all_experience(
            [ExperienceRecord(id="exp-1", role="Staff Engineer", company="Acme")],
            [ExperienceRecord(id="exp-1", role="Engineer", company="Acme", location="Austin, TX")],
        )
        assert len(merged) == 1
        assert merged[0].role == "Staff Engineer"
        assert merged[0].location == "Austin, TX"

    def test_keyless_records_keep_unique_slots(self):
        """Records with no usable content are not merged together."""
        assert len(ensure_all_education([EducationRecord(), EducationRecord()], [])) == 2

    def test_project_name_defaults(self):
        """A project without a name is named after its summary, else "Project"."""
        merged = ensure_all_projects(
            [ProjectRecord(summary="Route planner"), ProjectRecord(highlights=["Shipped"])],
            [],
        )
        assert [p.name for p in merged] == ["Route planner", "Project"]

    def test_education_merge(self):
        merged = ensure_all_education(
            [EducationRecord(school="SDSU ", degree="M.S.")],
            [EducationRecord(school="sdsu", degree="M.S.", field="Computer Science")],
        )
        assert len(merged) == 1
        assert (merged[0].school, merged[0].field) == ("SDSU", "Computer Science")

    def test_empty_inputs(self):
        assert ensure_all_experience([], []) == []
        assert ensure_all_projects(None, None) == []


# ---------------------------------------------------------------------------
# Experience cleanup
# ---------------------------------------------------------------------------
class TestExperienceCleanup:
    """Unit tests for the experience cleanup stages."""

    def test_consolidate_merges_headline_and_headless(self):
        """Same-headline entries merge and headless fragments join the previous entry."""
        entries = [
            ExperienceRecord(role="Dev", company="Acme", start_date="Jan 2020", achievements=["A"]),
            ExperienceRecord(achievements=["B"]),
            ExperienceRecord(role="Dev", company="Acme", start_date="January 2020", achievements=["C"]),
        ]
        result = consolidate_experience_entries(entries)
        assert len(result) == 1
        assert result[0].achievements == ["A", "B", "C"]
        assert result[0].start_date == "January 2020"

    def test_consolidate_keeps_leading_headless(self):
        """A headless entry with nothing before it is kept on its own."""
        entries = [
            ExperienceRecord(achievements=["Stray bullet"]),
            ExperienceRecord(role="Dev", company="Acme", achievements=["A"]),
            ExperienceRecord(),
        ]
        result = consolidate_experience_entries(entries)
        assert [(r.role, r.achievements) for r in result] == [("", ["Stray bullet"]), ("Dev", ["A"])]

    def test_prune_summary_repeats_and_contact(self):
        """Achievements repeating the summary or each other, or with contact details, are pruned."""
        entries = [
            ExperienceRecord(
                role="Dev",
                achievements=["Built a scheduler", "Led hiring.", "led hiring", "Email jane@example.com"],
            ),
            ExperienceRecord(achievements=["Built a scheduler."]),
        ]
        result = prune_duplicate_experience_content(entries, summary="Built a scheduler. Loves Go.")
        assert len(result) == 1
        assert result[0].achievements == ["Led hiring."]

    def test_dedupe_cards(self):
        entries = [
            ExperienceRecord(role="Dev", company="Acme", achievements=["A"]),
            ExperienceRecord(role="dev", company="ACME", achievements=["B"]),
            ExperienceRecord(role="Analyst", company="Globex"),
        ]
        assert [r.achievements for r in dedupe_experience_cards(entries)] == [["A"]]

    def test_should_drop_experience_entry(self):
        assert should_drop_experience_entry(ExperienceRecord(role="Dev"))
        assert should_drop_experience_entry(ExperienceRecord(achievements=["Reach me at jane@example.com"]))
        assert should_drop_experience_entry(ExperienceRecord(achievements=["word " * 70]))
        assert should_drop_experience_entry(
            ExperienceRecord(role="Dev", achievements=["Professional summary of my career so far"])
        )
        assert should_drop_experience_entry(ExperienceRecord(role="Dev", achievements=["alpha " * 151]))
        assert not should_drop_experience_entry(ExperienceRecord(role="Dev", achievements=["Built the billing service"]))

    def test_should_drop_headless_contact_token(self):
        """Headless text naming the user is dropped."""
        entry = ExperienceRecord(achievements=["Worked with John on infra"])
        assert should_drop_experience_entry(entry, contact_tokens={"john"})
        assert not should_drop_experience_entry(entry)

    def test_finalize_no_achievement_twice(self):
        """An achievement appears at most once across the whole list."""
        entries = [
            ExperienceRecord(role="Dev", company="Acme", achievements=["Built the billing service"]),
            ExperienceRecord(
                role="Analyst", company="Globex",
                achievements=["built the billing service.", "Ran reports weekly"],
            ),
        ]
        result = finalize_experience(entries)
        assert [r.achievements for r in result] == [["Built the billing service."], ["Ran reports weekly."]]

    def test_finalize_drops_profile_block(self):
        """A pasted profile paragraph is not a role."""
        entries = [ExperienceRecord(achievements=["Profile summary: Engineer with ten years"])]
        assert finalize_experience(entries) == []

    def test_finalize_cleans_headings_and_technologies(self):
        entries = [
            ExperienceRecord(
                role=" Senior  Developer ", company="Acme", location="Austin, TX",
                achievements=["shipped v2"], technologies=["Go", "go", " "],
            ),
        ]
        result = finalize_experience(entries)
        assert result[0].role == "Senior Developer"
        assert result[0].achievements == ["Shipped v2."]
        assert result[0].technologies == ["Go"]

    def test_finalize_clears_contact_details_from_detail_fields(self):
        """Location, dates and technologies carrying contact details are cleared."""
        entries = [
            ExperienceRecord(
                role="Senior Developer", company="Acme", location="call 555-123-4567",
                start_date="Jan 2020", end_date="jdoe@example.com",
                achievements=["Built a scheduler"], technologies=["Go", "www.jdoe.dev"],
            ),
        ]
        result = finalize_experience(entries)
        assert (result[0].location, result[0].start_date, result[0].end_date) == ("", "Jan 2020", "")
        assert result[0].technologies == ["Go"]


# ---------------------------------------------------------------------------
# Projects / education / skills
# ---------------------------------------------------------------------------
class TestProjectsEducationSkills:
    """Unit tests for the remaining list cleanups."""

    def test_sanitize_project_entries(self):
        """Contact details are stripped and oversized projects dropped when a limit is set."""
        projects = [
            ProjectRecord(name="RateLimiter", summary="Token bucket library", highlights=["Published to PyPI"]),
            ProjectRecord(name="Portfolio", summary="See www.jdoe.dev"),
            ProjectRecord(name="Huge", summary="Designed " * 25, highlights=["Shipped " * 15]),
        ]
        result = sanitize_project_entries(projects)
        assert [p.name for p in result] == ["RateLimiter", "Portfolio"]
        assert result[0].summary == "Token bucket library"
        assert (result[1].summary, result[1].highlights) == ("", [])

        unlimited = sanitize_project_entries(projects, max_combined_chars=None)
        assert [p.name for p in unlimited] == ["RateLimiter", "Portfolio", "Huge"]

    def test_normalize_education_output(self):
        entries = [
            EducationRecord(school="SDSU"),
            EducationRecord(),
            EducationRecord(school="X"),
            EducationRecord(school="X", start_date="2019"),
            EducationRecord(school="jdoe@example.com", degree="B.S."),
        ]
        result = normalize_education_output(entries)
        assert [(e.school, e.degree) for e in result] == [("SDSU", ""), ("X", ""), ("", "B.S.")]

    def test_normalize_education_clears_contact_details(self):
        """Field, location and grade carrying contact details are cleared; clean values are kept."""
        entries = [
            EducationRecord(
                school="MIT", degree="B.S.", field="see www.example.com",
                location="Cambridge, MA", grade="jane@example.com", start_date="2012",
            ),
            EducationRecord(school="SDSU", degree="M.S.", field="Computer Science", grade="3.9 GPA"),
        ]
        result = normalize_education_output(entries)
        assert (result[0].field, result[0].location, result[0].grade, result[0].start_date) == (
            "", "Cambridge, MA", "", "2012",
        )
        assert (result[1].field, result[1].grade) == ("Computer Science", "3.9 GPA")

    def test_fold_projects_without_experience(self):
        """Projects become experience records when there is no experience."""
        projects = [ProjectRecord(id="proj-1", name="RateLimiter", summary="Library", highlights=["Published"])]
        result = fold_projects_into_experience([], projects)
        assert [(r.id, r.role, r.achievements) for r in result] == [("proj-1", "RateLimiter", ["Published"])]

    def test_fold_projects_into_first_experience(self):
        """Highlights are appended to the first experience record with the project name."""
        experience = [
            ExperienceRecord(role="Dev", achievements=["A"]),
            ExperienceRecord(role="Analyst", achievements=["B"]),
        ]
        projects = [ProjectRecord(name="RateLimiter", summary="Token bucket library")]
        result = fold_projects_into_experience(experience, projects)
        assert result[0].achievements == ["A", "RateLimiter: Token bucket library"]
        assert result[1].achievements == ["B"]
        assert experience[0].achievements == ["A"]

    def test_fold_without_projects(self):
        experience = [ExperienceRecord(role="Dev")]
        assert fold_projects_into_experience(experience, []) == experience

    def test_combine_skills(self):
        """Generated skills come first and the user's own name is filtered out."""
        assert combine_skills(["AWS", "python"], ["Python", "Go", "John"], contact_tokens={"john"}) == [
            "AWS",
            "python",
            "Go",
        ]

    def test_assign_record_ids(self):
        """Only records without an id get a new one."""
        records = assign_record_ids([ExperienceRecord(id="exp-1"), ExperienceRecord()], new_id=lambda: "new")
        assert [r.id for r in records] == ["exp-1", "new"]

    def test_assign_record_ids_default_generator(self):
        ids = [r.id for r in assign_record_ids([ProjectRecord(), ProjectRecord()])]
        assert all(len(i) == 16 for i in ids)
        assert ids[0] != ids[1]
