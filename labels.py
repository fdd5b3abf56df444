"""Localized strings for exported documents and user-facing export messages."""

from __future__ import annotations

from typing import Dict, Optional

from config import ExportConfig

LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        # document chrome
        "generated_at": "Generated",
        "total_records": "Total Records",
        "footer_note": "This report was generated automatically by the {brand} admin panel.",
        "report_footer": "This report was prepared by {brand}. © {year}",
        "analysis_title": "Digital Analysis Report",
        # outcome messages
        "nothing_to_export": "No data found to export.",
        "popup_blocked": "A pop-up blocker may be active. Please allow pop-ups for this site.",
        "export_failed": "The export could not be completed.",
        "export_ready": "Export ready.",
        # sections
        "section_overall": "Overall Digital Score",
        "section_scores": "Category Scores",
        "section_summary": "Executive Summary",
        "section_technical": "Technical Status",
        "section_compliance": "Legal Compliance",
        "section_social": "Social Media Presence",
        "section_ui_review": "UI / UX Review",
        "section_pain_points": "Pain Points & Solutions",
        "section_roadmap": "Strategic Roadmap",
        "section_recommendations": "Prioritized Recommendations",
        "section_insights": "Key Insights",
        # score categories
        "category_overall": "Overall",
        "category_website": "Website",
        "category_seo": "SEO",
        "category_social_media": "Social Media",
        "category_content": "Content",
        "category_content_quality": "Content Quality",
        "category_branding": "Branding",
        "category_analytics": "Analytics",
        "category_mobile": "Mobile",
        "category_mobile_optimization": "Mobile Optimization",
        "category_performance": "Performance",
        "category_security": "Security",
        "category_user_experience": "User Experience",
        # tiers
        "tier_good": "Excellent",
        "tier_medium": "Good",
        "tier_poor": "Needs Improvement",
        # technical
        "ssl": "SSL Certificate",
        "ssl_active": "Active",
        "ssl_missing": "Missing",
        "mobile_performance": "Mobile Performance",
        "desktop_performance": "Desktop Performance",
        "lcp_mobile": "Mobile LCP",
        "lcp_desktop": "Desktop LCP",
        # compliance
        "compliance_kvkk": "KVKK",
        "compliance_cookie_policy": "Cookie Policy",
        "compliance_etbis": "ETBIS",
        "compliance_ok": "Compliant",
        "compliance_missing": "Missing",
        "compliance_warning": "Some legal requirements are not met. Missing items may create legal risk.",
        "compliance_score": "Compliance Score",
        # social
        "social_linkedin": "LinkedIn",
        "social_instagram": "Instagram",
        "social_facebook": "Facebook",
        "social_twitter": "X (Twitter)",
        "social_youtube": "YouTube",
        "social_tiktok": "TikTok",
        "social_absent": "Not found",
        "social_assessment": "Assessment",
        # ui review
        "ui_findings": "Findings",
        "ui_suggestions": "Suggestions",
        "ui_desktop": "Desktop",
        "ui_mobile": "Mobile",
        "ui_no_image": "No screenshot available",
        # pain points
        "pain_problem": "Problem",
        "pain_solution": "Solution",
        "pain_service": "Related service",
        # roadmap
        "roadmap_immediate": "Immediate (0-7 days)",
        "roadmap_short_term": "Short Term (30 days)",
        "roadmap_medium_term": "Medium Term (90 days)",
        "roadmap_long_term": "Long Term (1 year)",
        "roadmap_empty": "No items",
        # recommendations
        "priority_high": "High",
        "priority_medium": "Medium",
        "priority_low": "Low",
        "impact": "Impact",
        "effort": "Effort",
        # insights
        "insight_positive": "Positive",
        "insight_negative": "Negative",
        "insight_neutral": "Neutral",
        # statuses
        "status_pending": "Pending",
        "status_reviewing": "Reviewing",
        "status_interview": "Interview",
        "status_accepted": "Accepted",
        "status_approved": "Approved",
        "status_rejected": "Rejected",
        "status_in-progress": "In Progress",
        "status_completed": "Completed",
        "status_cancelled": "Cancelled",
    },
    "tr": {
        "generated_at": "Oluşturulma Tarihi",
        "total_records": "Toplam Kayıt",
        "footer_note": "Bu rapor {brand} Admin Panel tarafından otomatik olarak oluşturulmuştur.",
        "report_footer": "Bu rapor {brand} tarafından hazırlanmıştır. © {year}",
        "analysis_title": "Dijital Analiz Raporu",
        "nothing_to_export": "Dışa aktarılacak veri bulunamadı.",
        "popup_blocked": "Pop-up engelleyici aktif olabilir. Lütfen pop-up'lara izin verin.",
        "export_failed": "Dışa aktarma tamamlanamadı.",
        "export_ready": "Dışa aktarma hazır.",
        "section_overall": "Genel Dijital Skor",
        "section_scores": "Kategori Skorları",
        "section_summary": "Yönetici Özeti",
        "section_technical": "Teknik Durum",
        "section_compliance": "Yasal Uyumluluk",
        "section_social": "Sosyal Medya Varlığı",
        "section_ui_review": "UI / UX Değerlendirmesi",
        "section_pain_points": "Sorunlar ve Çözümler",
        "section_roadmap": "Stratejik Yol Haritası",
        "section_recommendations": "Öncelikli Öneriler",
        "section_insights": "Önemli Tespitler",
        "category_overall": "Genel",
        "category_website": "Web Sitesi",
        "category_seo": "SEO",
        "category_social_media": "Sosyal Medya",
        "category_content": "İçerik",
        "category_content_quality": "İçerik Kalitesi",
        "category_branding": "Marka",
        "category_analytics": "Analitik",
        "category_mobile": "Mobil",
        "category_mobile_optimization": "Mobil Optimizasyon",
        "category_performance": "Performans",
        "category_security": "Güvenlik",
        "category_user_experience": "Kullanıcı Deneyimi",
        "tier_good": "Mükemmel",
        "tier_medium": "İyi",
        "tier_poor": "Geliştirilmeli",
        "ssl": "SSL Sertifikası",
        "ssl_active": "Aktif",
        "ssl_missing": "Yok",
        "mobile_performance": "Mobil Performans",
        "desktop_performance": "Masaüstü Performans",
        "lcp_mobile": "Mobil LCP",
        "lcp_desktop": "Masaüstü LCP",
        "compliance_kvkk": "KVKK",
        "compliance_cookie_policy": "Çerez Politikası",
        "compliance_etbis": "ETBİS",
        "compliance_ok": "Uyumlu",
        "compliance_missing": "Eksik",
        "compliance_warning": "Bazı yasal gereklilikler karşılanmıyor. Eksik maddeler hukuki risk oluşturabilir.",
        "compliance_score": "Uyumluluk Skoru",
        "social_linkedin": "LinkedIn",
        "social_instagram": "Instagram",
        "social_facebook": "Facebook",
        "social_twitter": "X (Twitter)",
        "social_youtube": "YouTube",
        "social_tiktok": "TikTok",
        "social_absent": "Bulunamadı",
        "social_assessment": "Değerlendirme",
        "ui_findings": "Tespitler",
        "ui_suggestions": "Öneriler",
        "ui_desktop": "Masaüstü",
        "ui_mobile": "Mobil",
        "ui_no_image": "Ekran görüntüsü yok",
        "pain_problem": "Sorun",
        "pain_solution": "Çözüm",
        "pain_service": "İlgili hizmet",
        "roadmap_immediate": "Acil (0-7 gün)",
        "roadmap_short_term": "Kısa Vade (30 gün)",
        "roadmap_medium_term": "Orta Vade (90 gün)",
        "roadmap_long_term": "Uzun Vade (1 yıl)",
        "roadmap_empty": "Bu dönem için madde yok",
        "priority_high": "Yüksek",
        "priority_medium": "Orta",
        "priority_low": "Düşük",
        "impact": "Etki",
        "effort": "Efor",
        "insight_positive": "Olumlu",
        "insight_negative": "Olumsuz",
        "insight_neutral": "Nötr",
        "status_pending": "Bekliyor",
        "status_reviewing": "İnceleniyor",
        "status_interview": "Mülakat",
        "status_accepted": "Kabul Edildi",
        "status_approved": "Onaylandı",
        "status_rejected": "Reddedildi",
        "status_in-progress": "Devam Ediyor",
        "status_completed": "Tamamlandı",
        "status_cancelled": "İptal Edildi",
    },
}


def label(key: str, locale: Optional[str] = None, **values: object) -> str:
    """Look up ``key`` for ``locale``, falling back to English and then the key."""

    catalogue = LABELS.get((locale or ExportConfig.locale()).lower()) or LABELS["en"]
    text = catalogue.get(key) or LABELS["en"].get(key) or key
    if values:
        text = text.format(**values)
    return text


def has_label(key: str) -> bool:
    return key in LABELS["en"]
